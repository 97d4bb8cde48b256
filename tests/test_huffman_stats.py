import pytest

from huffman_stats import (
	compression_ratio,
	entropy,
	entropy_efficiency,
	format_size,
	theoretical_min_size,
)


def test_entropy_of_uniform_bytes_is_eight():
	assert entropy(bytes(range(256))) == pytest.approx(8.0)


def test_entropy_of_skewed_input():
	assert entropy(b"aaab") == pytest.approx(0.811278, abs=1e-6)


def test_entropy_of_constant_and_empty_input():
	assert entropy(b"AAAA") == 0.0
	assert entropy(b"") == 0.0


def test_theoretical_min_size_rounds_up():
	assert theoretical_min_size(b"aaab") == 1
	assert theoretical_min_size(bytes(range(256)) * 4) == 1024
	assert theoretical_min_size(b"A" * 100) == 0


def test_compression_ratio():
	assert compression_ratio(100, 25) == pytest.approx(75.0)
	assert compression_ratio(100, 150) == pytest.approx(-50.0)
	assert compression_ratio(0, 10) == 0.0


def test_entropy_efficiency():
	data = bytes(range(256)) * 4
	assert entropy_efficiency(data, 2048) == pytest.approx(50.0)
	assert entropy_efficiency(b"A" * 10, 5) is None


@pytest.mark.parametrize("size, text", [
	(0, "0 B"),
	(17, "17 B"),
	(1024, "1 KB"),
	(1025, "1 KB 1 B"),
	(1536 * 1024, "1 MB 512 KB"),
	(5 * 1024 * 1024 + 3, "5 MB 0 KB 3 B"),
	(1024 ** 3, "1 GB"),
	(1024 ** 3 + 5, "1 GB 0 MB 0 KB 5 B"),
])
def test_format_size(size, text):
	assert format_size(size) == text
