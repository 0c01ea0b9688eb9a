"""Huffman-coding compression of single files and directory trees."""

__version__ = "0.1.0"
__all__ = ["bitstream", "cli", "compressor", "entry", "tree"]