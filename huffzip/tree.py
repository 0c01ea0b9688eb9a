"""Huffman trees over byte values."""

from __future__ import annotations

import heapq
from collections.abc import Mapping
from dataclasses import dataclass
from itertools import count


class HuffmanError(Exception):
    """Raised when a Huffman tree is missing, malformed or cannot encode a byte."""


@dataclass
class HuffmanNode:
    """A tree node; leaves carry a byte value, inner nodes two children."""

    frequency: int
    symbol: int = 0
    left: HuffmanNode | None = None
    right: HuffmanNode | None = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __lt__(self, other: HuffmanNode) -> bool:
        """Lower frequency sorts first."""
        return self.frequency < other.frequency


class HuffmanTree:
    """Builds a Huffman tree, derives its codes and (de)serializes it.

    The serialized form is a pre-order walk: ``1, byte`` for a leaf and
    ``0`` followed by the left and right subtrees for an inner node.
    """

    def __init__(self) -> None:
        self._root: HuffmanNode | None = None
        self._codes: dict[int, str] = {}

    def build(self, frequencies: Mapping[int, int]) -> None:
        """Build the tree from a mapping of byte value to occurrence count."""
        if not frequencies:
            raise ValueError("Frequency map cannot be empty")
        order = count()
        heap: list[tuple[int, int, HuffmanNode]] = []
        for symbol, frequency in sorted(frequencies.items()):
            if not 0 <= symbol <= 0xFF:
                raise ValueError(f"Symbol out of byte range: {symbol}")
            heap.append((frequency, next(order), HuffmanNode(frequency, symbol)))
        heapq.heapify(heap)
        while len(heap) > 1:
            left_freq, _, left = heapq.heappop(heap)
            right_freq, _, right = heapq.heappop(heap)
            combined = left_freq + right_freq
            parent = HuffmanNode(combined, left=left, right=right)
            heapq.heappush(heap, (combined, next(order), parent))
        self._root = heap[0][2]
        self._codes = {}

    def generate_codes(self) -> None:
        """Fill the encoding table from the current tree."""
        if self._root is None:
            raise HuffmanError("Tree not built")
        codes: dict[int, str] = {}
        if self._root.is_leaf():
            # A lone symbol still needs one bit per occurrence.
            codes[self._root.symbol] = "0"
        else:
            stack: list[tuple[HuffmanNode, str]] = [(self._root, "")]
            while stack:
                node, code = stack.pop()
                if node.is_leaf():
                    codes[node.symbol] = code
                    continue
                if node.right is not None:
                    stack.append((node.right, code + "1"))
                if node.left is not None:
                    stack.append((node.left, code + "0"))
        self._codes = codes

    def serialize(self) -> bytes:
        """Return the pre-order byte form of the tree."""
        if self._root is None:
            raise HuffmanError("Tree not built")
        out = bytearray()
        stack: list[HuffmanNode] = [self._root]
        while stack:
            node = stack.pop()
            if node.is_leaf():
                out += bytes((1, node.symbol))
            else:
                out.append(0)
                if node.right is not None:
                    stack.append(node.right)
                if node.left is not None:
                    stack.append(node.left)
        return bytes(out)

    def deserialize(self, data: bytes, offset: int) -> int:
        """Replace the tree with the one stored at ``offset``; return the offset past it."""
        view = memoryview(data)
        if offset >= len(view):
            raise HuffmanError("Insufficient data for deserialization")
        root: HuffmanNode | None = None
        awaiting: list[HuffmanNode] = []
        while True:
            if offset >= len(view):
                raise HuffmanError("Insufficient data for deserialization")
            tag = view[offset]
            offset += 1
            if tag == 1:
                if offset >= len(view):
                    raise HuffmanError("Insufficient data for character")
                node = HuffmanNode(0, view[offset])
                offset += 1
            else:
                node = HuffmanNode(0)
            if awaiting:
                parent = awaiting[-1]
                if parent.left is None:
                    parent.left = node
                else:
                    parent.right = node
                    awaiting.pop()
            else:
                root = node
            if tag != 1:
                awaiting.append(node)
            if not awaiting:
                break
        self._root = root
        self._codes = {}
        return offset

    @property
    def encoding_table(self) -> dict[int, str]:
        """Mapping of byte value to its code as a string of '0' and '1'."""
        return dict(self._codes)

    def encode(self, byte: int) -> str:
        """Return the code for ``byte``."""
        try:
            return self._codes[byte]
        except KeyError:
            raise HuffmanError("Character not found in encoding table") from None

    def clear(self) -> None:
        """Drop the tree and its codes."""
        self._root = None
        self._codes = {}

    @property
    def root(self) -> HuffmanNode | None:
        """The root node, or None before a tree is built or loaded."""
        return self._root