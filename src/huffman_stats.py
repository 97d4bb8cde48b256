# filename: huffman_stats.py

import math
from collections import Counter

KB = 1024
MB = 1024 * KB
GB = 1024 * MB


def entropy(data):
    """Shannon entropy of the byte distribution, in bits per symbol."""
    if not data:
        return 0.0
    size = len(data)
    result = 0.0
    for count in Counter(data).values():
        p = count / size
        result -= p * math.log2(p)
    return result


def theoretical_min_bits(data):
    return len(data) * entropy(data)


def theoretical_min_size(data):
    # whole bytes needed by an ideal order-0 coder
    return math.ceil(theoretical_min_bits(data) / 8)


def compression_ratio(input_size, output_size):
    """Percentage saved; negative when the output grew."""
    if input_size == 0:
        return 0.0
    return (1.0 - output_size / input_size) * 100


def entropy_efficiency(data, encoded_size):
    """How close `encoded_size` comes to the entropy bound, as a percentage.

    Returns None when the bound is zero (empty or single-symbol input).
    """
    min_bytes = theoretical_min_bits(data) / 8
    if math.ceil(min_bytes) == 0 or encoded_size == 0:
        return None
    return min_bytes / encoded_size * 100


def format_size(size):
    """Render a byte count as e.g. '1 MB 512 KB' or '17 B'.

    Lower units are listed down to the last non-zero one.
    """
    units = [(GB, "GB"), (MB, "MB"), (KB, "KB"), (1, "B")]
    parts = []
    remainder = size
    for unit, name in units:
        value, remainder = divmod(remainder, unit)
        if parts or value or unit == 1:
            parts.append((value, name))
    # drop trailing zero units, but always keep the leading one
    while len(parts) > 1 and parts[-1][0] == 0:
        parts.pop()
    return " ".join(f"{value} {name}" for value, name in parts)
