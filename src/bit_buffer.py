# filename: bit_buffer.py

from bitarray import bitarray, decodetree
from bitarray.util import ba2int, int2ba

from huffman_errors import truncated


class BitBuffer:
    """Packed bit sequence, most significant bit first within each byte.

    Writing only ever appends. Reading goes through a cursor that starts at
    bit 0 and only moves forward; every read checks the remaining length
    first and raises TruncatedStreamError instead of running off the end.
    """

    def __init__(self, data=None):
        self.bits = bitarray(endian='big')
        if data:
            self.bits.frombytes(data)
        self.pos = 0

    @classmethod
    def from_bits(cls, bits):
        buf = cls()
        buf.bits.extend(bits)
        return buf

    def __len__(self):
        return len(self.bits)

    @property
    def remaining(self):
        return len(self.bits) - self.pos

    def append_bit(self, bit):
        self.bits.append(1 if bit else 0)

    def append_bits(self, bits):
        # accepts '0'/'1' strings as well as other bitarrays
        self.bits.extend(bits)

    def append_uint(self, value, width=32):
        if value < 0 or value >> width:
            raise ValueError(f"{value} does not fit in {width} bits")
        self.bits.extend(int2ba(value, length=width, endian='big'))

    def append_codes(self, codes, data):
        """Append the code of every symbol of `data`, in order."""
        table = {symbol: bitarray(code, endian='big') for symbol, code in codes.items()}
        self.bits.encode(table, data)

    def read_codes(self, codes):
        """Decode every unread bit with a prefix code.

        Raises ValueError when the bits follow a path the code does not have.
        """
        tree = decodetree({symbol: bitarray(code, endian='big') for symbol, code in codes.items()})
        decoded = bytes(self.bits[self.pos:].decode(tree))
        self.pos = len(self.bits)
        return decoded

    def read_bit(self):
        if self.pos >= len(self.bits):
            raise truncated(1, 0)
        bit = self.bits[self.pos]
        self.pos += 1
        return bit

    def read_uint(self, width=32):
        if self.remaining < width:
            raise truncated(width, self.remaining)
        value = ba2int(self.bits[self.pos:self.pos + width])
        self.pos += width
        return value

    def take(self, count):
        """Split off the next `count` bits as an independent buffer."""
        if self.remaining < count:
            raise truncated(count, self.remaining)
        section = BitBuffer.from_bits(self.bits[self.pos:self.pos + count])
        self.pos += count
        return section

    def tobytes(self):
        # bitarray zero-fills the last partial byte
        return self.bits.tobytes()

    def to01(self):
        return self.bits.to01()
