import pytest

import huffman_cli
from huffman_service import HuffmanService


@pytest.fixture
def workdir(tmp_path, monkeypatch):
	monkeypatch.chdir(tmp_path)
	return tmp_path


def test_encoded_filename_uses_stem(workdir):
	assert huffman_cli.encoded_filename("docs/report.txt").name == "encode_report.bin"


def test_encoded_filename_skips_existing(workdir):
	(workdir / "encode_report.bin").write_bytes(b"")
	(workdir / "encode_report_1.bin").write_bytes(b"")
	assert huffman_cli.encoded_filename("report.txt").name == "encode_report_2.bin"


def test_decoded_filename_strips_prefix(workdir):
	assert huffman_cli.decoded_filename("encode_report.bin").name == "decode_report"
	assert huffman_cli.decoded_filename("other.bin").name == "decode_other"


def test_decoded_filename_skips_existing(workdir):
	(workdir / "decode_report").write_bytes(b"")
	assert huffman_cli.decoded_filename("encode_report.bin").name == "decode_report_1"


def test_encode_then_decode_files(workdir, capsys):
	data = b"the rain in spain stays mainly in the plain\n" * 40
	(workdir / "notes.txt").write_bytes(data)

	assert huffman_cli.main(["notes.txt"]) == 0
	encoded = (workdir / "encode_notes.bin").read_bytes()
	assert encoded == HuffmanService().encode(data)
	out = capsys.readouterr().out
	assert "Compression ratio:" in out
	assert "Efficiency relative to entropy:" in out

	assert huffman_cli.main(["-d", "encode_notes.bin"]) == 0
	assert (workdir / "decode_notes").read_bytes() == data
	assert "Decoding finished successfully." in capsys.readouterr().out


def test_explicit_output_path(workdir):
	(workdir / "in.dat").write_bytes(b"\x00\x01\x02")
	assert huffman_cli.main(["in.dat", "-o", "packed"]) == 0
	assert huffman_cli.main(["-d", "packed", "--output", "unpacked"]) == 0
	assert (workdir / "unpacked").read_bytes() == b"\x00\x01\x02"


def test_empty_file_round_trip(workdir):
	(workdir / "empty").write_bytes(b"")
	assert huffman_cli.main(["empty"]) == 0
	assert (workdir / "encode_empty.bin").read_bytes() == b""
	assert huffman_cli.main(["-d", "encode_empty.bin"]) == 0
	assert (workdir / "decode_empty").read_bytes() == b""


def test_entropy_mode(workdir, capsys):
	(workdir / "uniform").write_bytes(bytes(range(256)))
	assert huffman_cli.main(["-e", "uniform"]) == 0
	out = capsys.readouterr().out
	assert "Entropy: 8.000 bits/symbol" in out
	assert "Theoretical minimum size: 256 B (256 bytes)" in out
	assert not list(workdir.glob("encode_*"))


def test_corrupt_artifact_fails(workdir):
	(workdir / "bad.bin").write_bytes(b"\xff\xff\xff\xff\x00")
	assert huffman_cli.main(["-d", "bad.bin", "-q"]) == 1
	assert not (workdir / "decode_bad").exists()


def test_truncated_artifact_writes_prefix(workdir):
	data = b"partial output is still written " * 10
	(workdir / "cut.bin").write_bytes(HuffmanService().encode(data)[:-4])
	assert huffman_cli.main(["-d", "cut.bin", "-q"]) == 1
	written = (workdir / "decode_cut").read_bytes()
	assert data.startswith(written)
	assert written != data


def test_missing_input_fails(workdir):
	assert huffman_cli.main(["does-not-exist", "-q"]) == 1


def test_decode_and_entropy_are_exclusive(workdir):
	with pytest.raises(SystemExit) as e:
		huffman_cli.main(["-d", "-e", "x"])
	assert e.value.code == 2
