# filename: huffman_service.py

import enum
import logging
from typing import NamedTuple, Optional

from bit_buffer import BitBuffer
from huffman_core import HuffmanLogic
from huffman_errors import CorruptArtifactError, TruncatedStreamError

logger = logging.getLogger(__name__)

# width of the tree-length and payload-length header fields
LENGTH_FIELD_BITS = 32
MAX_FIELD_VALUE = (1 << LENGTH_FIELD_BITS) - 1


class DecodeStatus(enum.Enum):
    OK = "ok"
    TRUNCATED = "truncated"
    CORRUPT = "corrupt"


class DecodeResult(NamedTuple):
    """Outcome of a decode: the bytes recovered plus how the decode ended.

    `data` is the full original on OK, a prefix of it on TRUNCATED and
    whatever was recovered before the failure on CORRUPT.
    """

    data: bytes
    status: DecodeStatus = DecodeStatus.OK
    reason: Optional[str] = None

    def __bool__(self):
        return self.status is DecodeStatus.OK

    @property
    def ok(self):
        return self.status is DecodeStatus.OK


class HuffmanService:
    def __init__(self):
        self.logic = HuffmanLogic()

    def encode(self, data):
        """Encode `data` into a self-describing artifact.

        Layout: 32-bit tree length, the serialized tree, 32-bit payload
        length, the payload, zero padding to a byte boundary. Empty input
        gives empty output.
        """
        if not data:
            return b""
        freqs = self.logic.count_frequencies(data)
        tree = self.logic.build_tree(freqs)
        codes = self.logic.generate_codes(tree)

        tree_bits = self.logic.serialize_tree(tree)
        payload_length = sum(len(codes[symbol]) * count for symbol, count in freqs.items())
        if payload_length > MAX_FIELD_VALUE:
            raise ValueError(f"payload of {payload_length} bits does not fit a {LENGTH_FIELD_BITS}-bit length field")

        out = BitBuffer()
        out.append_uint(len(tree_bits), LENGTH_FIELD_BITS)
        out.append_bits(tree_bits.bits)
        out.append_uint(payload_length, LENGTH_FIELD_BITS)
        out.append_codes(codes, data)

        logger.debug(
            "encoded %d byte(s): %d symbol(s), %d tree bits, %d payload bits",
            len(data), len(codes), len(tree_bits), payload_length,
        )
        return out.tobytes()

    def decode(self, data):
        """Decode an artifact produced by encode(); never raises on bad input."""
        if not data:
            return DecodeResult(b"")

        bits = BitBuffer(data)
        try:
            tree_length = bits.read_uint(LENGTH_FIELD_BITS)
            tree = self.logic.deserialize_tree(bits.take(tree_length))
            payload_length = bits.read_uint(LENGTH_FIELD_BITS)
        except CorruptArtifactError as e:
            logger.warning("corrupt artifact header: %s", e)
            return DecodeResult(b"", DecodeStatus.CORRUPT, str(e))

        result = self._decode_payload(bits, tree, payload_length)
        if not result:
            logger.warning("decode stopped early (%s): %s", result.status.value, result.reason)
        return result

    def _decode_payload(self, bits, root, payload_length):
        available = min(payload_length, bits.remaining)
        payload = bits.take(available)

        if root.is_leaf():
            # single-symbol tree: every code is a lone 0 bit
            if payload.bits.count(1):
                first_one = payload.bits.index(1)
                return DecodeResult(
                    bytes([root.symbol]) * first_one,
                    DecodeStatus.CORRUPT,
                    f"payload bit {first_one} leaves the single-symbol tree",
                )
            out = bytes([root.symbol]) * available
            node = root
        else:
            out = self._decode_with_table(payload, root)
            node = root
            if out is None:
                out = bytearray()
                for index, bit in enumerate(payload.bits):
                    node = node.right if bit else node.left
                    if node is None:
                        return DecodeResult(
                            bytes(out),
                            DecodeStatus.CORRUPT,
                            f"payload bit {index} leaves the tree",
                        )
                    if node.is_leaf():
                        out.append(node.symbol)
                        node = root
                out = bytes(out)

        if available < payload_length:
            return DecodeResult(
                out,
                DecodeStatus.TRUNCATED,
                f"payload claims {payload_length} bit(s), only {available} available",
            )
        if node is not root:
            return DecodeResult(out, DecodeStatus.TRUNCATED, "payload ends inside a code")
        return DecodeResult(out)

    def _decode_with_table(self, payload, root):
        """Decode through bitarray's prefix-code tree.

        Returns None whenever the result cannot be trusted (a path outside the
        code, repeated symbols in the tree, a trailing partial code) so the
        caller can walk the tree bit by bit instead.
        """
        codes = self.logic.generate_codes(root)
        start = payload.pos
        try:
            out = payload.read_codes(codes)
        except ValueError:
            payload.pos = start
            return None
        if sum(len(codes[symbol]) for symbol in out) != len(payload) - start:
            payload.pos = start
            return None
        return out

    def compress(self, data):
        return self.encode(data)

    def decompress(self, data, strict=True):
        """Decode `data`, raising instead of returning a failed result.

        With strict=False a truncated artifact yields the recovered prefix.
        """
        result = self.decode(data)
        if result.status is DecodeStatus.CORRUPT:
            raise CorruptArtifactError(result.reason)
        if result.status is DecodeStatus.TRUNCATED and strict:
            raise TruncatedStreamError(result.reason)
        return result.data


def encode(data):
    return HuffmanService().encode(data)


def decode(data):
    return HuffmanService().decode(data)
