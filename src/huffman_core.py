# filename: huffman_core.py

import heapq
import logging
from collections import Counter

from bit_buffer import BitBuffer

logger = logging.getLogger(__name__)

LEAF_MARKER = 1
INTERNAL_MARKER = 0
SYMBOL_BITS = 8


class HuffmanNode:
    def __init__(self, symbol=None, weight=0, left=None, right=None):
        self.symbol = symbol
        self.weight = weight
        self.left = left
        self.right = right

    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode(symbol=0x{self.symbol:02x}, weight={self.weight})"
        return f"HuffmanNode(weight={self.weight})"


class HuffmanLogic:
    """Tree construction, code assignment and tree (de)serialization.

    Holds no state between calls: every method works only on its arguments,
    so one instance can be shared freely.
    """

    def count_frequencies(self, data):
        # Frequency analysis of the input byte data
        return Counter(data)

    def build_tree(self, freqs):
        """Merge the two lightest nodes until one root is left.

        Heap entries are ordered by (weight, sequence). Leaves are numbered
        in ascending byte order and every merged node takes the next number,
        so equal weights always pop in the same order. The first node popped
        becomes the left child.

        A table with a single symbol yields that leaf as the root.
        """
        if not freqs:
            raise ValueError("cannot build a Huffman tree from an empty frequency table")

        priority_queue = []
        for sequence, symbol in enumerate(sorted(freqs)):
            priority_queue.append((freqs[symbol], sequence, HuffmanNode(symbol, freqs[symbol])))
        heapq.heapify(priority_queue)
        sequence = len(priority_queue)

        # Iteratively merge nodes to form the binary tree
        while len(priority_queue) > 1:
            left_weight, _, left = heapq.heappop(priority_queue)
            right_weight, _, right = heapq.heappop(priority_queue)
            merged = HuffmanNode(None, left_weight + right_weight, left, right)
            heapq.heappush(priority_queue, (merged.weight, sequence, merged))
            sequence += 1

        return priority_queue[0][2]

    def generate_codes(self, root):
        """Map each leaf symbol to its path: '0' for left, '1' for right."""
        if root.is_leaf():
            # a lone leaf still needs one bit per symbol
            return {root.symbol: "0"}

        codes = {}
        stack = [(root, "")]
        while stack:
            node, path = stack.pop()
            if node.is_leaf():
                codes[node.symbol] = path
                continue
            if node.right is not None:
                stack.append((node.right, path + "1"))
            stack.append((node.left, path + "0"))
        return codes

    def serialize_tree(self, root, out=None):
        """Write the tree in pre-order: 1 + 8 bits per leaf, 0 per internal node."""
        if out is None:
            out = BitBuffer()
        stack = [root]
        while stack:
            node = stack.pop()
            if node.is_leaf():
                out.append_bit(LEAF_MARKER)
                out.append_uint(node.symbol, SYMBOL_BITS)
            else:
                out.append_bit(INTERNAL_MARKER)
                stack.append(node.right)
                stack.append(node.left)
        return out

    def deserialize_tree(self, bits):
        """Rebuild a tree from the serialized tree section `bits`.

        Raises TruncatedStreamError when a record runs past the end of the
        section. Bits left over once the tree is complete are ignored.

        A section that ends right after `0 1xxxxxxxx` is read as one leaf
        wrapped under a root with no right child, the single-symbol layout
        some encoders write.
        """
        root = None
        # internal nodes still waiting for a child, innermost last
        pending = []
        while True:
            if not bits.remaining and _wraps_lone_leaf(root, pending):
                logger.debug("single leaf wrapped under a one-child root")
                break
            if bits.read_bit() == LEAF_MARKER:
                node = HuffmanNode(bits.read_uint(SYMBOL_BITS))
            else:
                node = HuffmanNode()

            if root is None:
                root = node
            else:
                parent = pending[-1]
                if parent.left is None:
                    parent.left = node
                else:
                    parent.right = node
                    pending.pop()

            if node.symbol is None:
                pending.append(node)
            if not pending:
                break

        if bits.remaining:
            logger.debug("ignoring %d unused bit(s) after the serialized tree", bits.remaining)
        logger.debug("rebuilt tree from %d bits", len(bits) - bits.remaining)
        return root


def _wraps_lone_leaf(root, pending):
    # only the root is open and it already holds a leaf on the left
    return pending == [root] and root.left is not None and root.left.is_leaf()
