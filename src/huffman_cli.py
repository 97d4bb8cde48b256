#!/usr/bin/env python3
"""
Command line front end for the Huffman codec.

Modes:
    huffman-codec FILE          encode FILE into encode_<stem>.bin
    huffman-codec -d FILE       decode FILE into decode_<stem>
    huffman-codec -e FILE       print the size and entropy of FILE

Output files are created in the current directory; an existing file is
never overwritten, a numeric suffix is added instead.
"""
import argparse
import logging
import sys
from pathlib import Path

from huffman_errors import HuffmanError
from huffman_service import DecodeStatus, HuffmanService
from huffman_stats import (
    compression_ratio,
    entropy,
    entropy_efficiency,
    format_size,
    theoretical_min_size,
)

logger = logging.getLogger(__name__)

ENCODED_PREFIX = "encode_"
DECODED_PREFIX = "decode_"
ENCODED_SUFFIX = ".bin"


def _first_free(directory, make_name):
    """Return make_name(0), make_name(1), ... whichever does not exist yet."""
    counter = 0
    while True:
        candidate = Path(directory) / make_name(counter)
        if not candidate.exists():
            return candidate
        counter += 1


def encoded_filename(input_path, directory="."):
    stem = Path(input_path).stem
    return _first_free(
        directory,
        lambda n: f"{ENCODED_PREFIX}{stem}{'_' + str(n) if n else ''}{ENCODED_SUFFIX}",
    )


def decoded_filename(encoded_path, directory="."):
    stem = Path(encoded_path).stem
    if stem.startswith(ENCODED_PREFIX):
        stem = stem[len(ENCODED_PREFIX):]
    return _first_free(
        directory,
        lambda n: f"{DECODED_PREFIX}{stem}{'_' + str(n) if n else ''}",
    )


def describe(label, data):
    print(f"{label}: {format_size(len(data))} ({len(data)} bytes)")
    print(f"{label} entropy: {entropy(data):.3f} bits/symbol")


def print_entropy(path, data):
    min_size = theoretical_min_size(data)
    print(f"File: {path}")
    print(f"Size: {format_size(len(data))} ({len(data)} bytes)")
    print(f"Entropy: {entropy(data):.3f} bits/symbol")
    print(f"Theoretical minimum size: {format_size(min_size)} ({min_size} bytes)")


def run_encode(service, input_path, output_path):
    print(f"Encoding: {input_path}")
    print(f"Output: {output_path}")
    data = Path(input_path).read_bytes()
    describe("Input", data)
    min_size = theoretical_min_size(data)
    print(f"Theoretical limit: {format_size(min_size)} ({min_size} bytes)")

    encoded = service.encode(data)
    describe("Encoded", encoded)
    Path(output_path).write_bytes(encoded)
    logger.info("wrote %d bytes to %s", len(encoded), output_path)

    if data:
        print(f"Compression ratio: {compression_ratio(len(data), len(encoded)):.2f}%")
        efficiency = entropy_efficiency(data, len(encoded))
        if efficiency is not None:
            print(f"Efficiency relative to entropy: {efficiency:.2f}%")
    return 0


def run_decode(service, input_path, output_path):
    print(f"Decoding: {input_path}")
    print(f"Output: {output_path}")
    encoded = Path(input_path).read_bytes()
    describe("Encoded", encoded)

    result = service.decode(encoded)
    if result.status is DecodeStatus.CORRUPT:
        logger.error("%s is not a valid artifact: %s", input_path, result.reason)
        return 1

    describe("Decoded", result.data)
    Path(output_path).write_bytes(result.data)
    logger.info("wrote %d bytes to %s", len(result.data), output_path)
    if result.status is DecodeStatus.TRUNCATED:
        logger.warning("%s is truncated, wrote the first %d bytes only: %s",
                       input_path, len(result.data), result.reason)
        return 1
    print("Decoding finished successfully.")
    return 0


def configure_logging(verbosity):
    level = {-1: logging.ERROR, 0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="huffman-codec",
        description="Static Huffman compression of arbitrary files",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-d", "--decode", action="store_true", help="decode an encoded file")
    mode.add_argument("-e", "--entropy", action="store_true", help="only report size and entropy")
    parser.add_argument("file", help="file to encode, decode or measure")
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="output path (default: encode_<name>.bin or decode_<name> in the current directory)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more log output")
    parser.add_argument("-q", "--quiet", action="store_true", help="only log errors")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(-1 if args.quiet else args.verbose)

    try:
        if args.entropy:
            print_entropy(args.file, Path(args.file).read_bytes())
            return 0

        service = HuffmanService()
        if args.decode:
            output = args.output or decoded_filename(args.file)
            return run_decode(service, args.file, output)
        output = args.output or encoded_filename(args.file)
        return run_encode(service, args.file, output)
    except (OSError, HuffmanError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
