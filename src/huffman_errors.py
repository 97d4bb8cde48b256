# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for everything the codec raises on bad artifacts."""


class CorruptArtifactError(HuffmanError):
    """The header or the serialized tree is structurally invalid."""


class TruncatedStreamError(CorruptArtifactError):
    """A section claims more bits than the artifact holds."""


def truncated(wanted, available):
    return TruncatedStreamError(f"wanted {wanted} bit(s), only {available} available")
