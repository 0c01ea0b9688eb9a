"""Huffman compression of single files and directory trees into one archive."""

from __future__ import annotations

import os
import struct
from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from time import perf_counter
from typing import BinaryIO

from huffzip.entry import FileEntry
from huffzip.tree import HuffmanError, HuffmanNode, HuffmanTree

MAGIC_NUMBER = 0x46465548  # "HUFF" when stored little-endian
VERSION = 1

# magic, version, original size, tree size, data size, type flag, path length
_HEADER = struct.Struct("<IBQIIBH")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_ENTRY_FIXED_TAIL = 8 + 8 + 1
_CHUNK = 1 << 16


@dataclass(frozen=True)
class CompressionStats:
    """Figures describing the last compression or decompression.

    ``file_count`` is the number of archive entries handled (files and
    directories alike), or 1 for a single-file archive.
    """

    original_size: int = 0
    compressed_size: int = 0
    compression_ratio: float = 0.0
    compression_time: float = 0.0
    file_count: int = 0


@dataclass(frozen=True)
class _Header:
    original_path: str
    original_size: int
    tree_size: int
    data_size: int
    is_directory: bool


def calculate_frequency(path: str | os.PathLike[str]) -> Counter[int]:
    """Count how often each byte value occurs in the file at ``path``."""
    counts: Counter[int] = Counter()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK), b""):
            counts.update(chunk)
    return counts


def _ratio(compressed: int, original: int) -> float:
    return compressed / original * 100.0 if original else 0.0


def _encode(data: bytes, codes: Mapping[int, str]) -> bytes:
    """Pack the codes of ``data`` most significant bit first, zero padded."""
    try:
        bits = "".join(map(codes.__getitem__, data))
    except KeyError:
        raise HuffmanError("Character not found in encoding table") from None
    if not bits:
        return b""
    bits += "0" * (-len(bits) % 8)
    return int(bits, 2).to_bytes(len(bits) // 8, "big")


def _encoded_bits(counts: Mapping[int, int], codes: Mapping[int, str]) -> int:
    return sum(len(codes[symbol]) * n for symbol, n in counts.items())


def _decode(data: bytes, root: HuffmanNode | None, size: int) -> bytes:
    """Decode ``size`` bytes from the packed bits in ``data``."""
    out = bytearray()
    if size == 0:
        return bytes(out)
    if root is None:
        raise HuffmanError("Tree not built")
    node = root
    for byte in data:
        for shift in range(7, -1, -1):
            if not root.is_leaf():
                node = node.right if (byte >> shift) & 1 else node.left
                if node is None:
                    raise HuffmanError("Malformed Huffman tree")
                if not node.is_leaf():
                    continue
            out.append(node.symbol)
            node = root
            if len(out) == size:
                return bytes(out)
    raise HuffmanError("Unexpected end of file while decompressing")


def _read_exact(handle: BinaryIO, size: int) -> bytes:
    data = handle.read(size)
    if len(data) < size:
        raise HuffmanError("Unexpected end of file while decompressing")
    return data


def _write_header(
    handle: BinaryIO,
    path: str,
    original_size: int,
    tree_size: int,
    data_size: int,
    is_directory: bool,
) -> None:
    encoded = path.encode("utf-8", "surrogateescape")
    if len(encoded) > 0xFFFF:
        raise ValueError("Path too long")
    if data_size > 0xFFFFFFFF:
        raise ValueError("Compressed data too large for archive header")
    handle.write(
        _HEADER.pack(
            MAGIC_NUMBER,
            VERSION,
            original_size,
            tree_size,
            data_size,
            1 if is_directory else 0,
            len(encoded),
        )
    )
    handle.write(encoded)
    handle.write(_U16.pack(0))


def _read_header(handle: BinaryIO) -> _Header:
    raw = handle.read(_HEADER.size)
    if len(raw) < 4 or _U32.unpack_from(raw)[0] != MAGIC_NUMBER:
        raise HuffmanError("Invalid magic number")
    if len(raw) < _HEADER.size:
        raise HuffmanError("Unexpected end of file while reading header")
    _, version, original_size, tree_size, data_size, flag, path_length = _HEADER.unpack(raw)
    if version != VERSION:
        raise HuffmanError(f"Unsupported version: {version}")
    path_bytes = _read_exact(handle, path_length).split(b"\0", 1)[0]
    _read_exact(handle, _U16.size)
    return _Header(
        path_bytes.decode("utf-8", "surrogateescape"),
        original_size,
        tree_size,
        data_size,
        flag != 0,
    )


def _read_entry(handle: BinaryIO) -> FileEntry:
    raw = _read_exact(handle, 2)
    raw += _read_exact(handle, int.from_bytes(raw, "big") + _ENTRY_FIXED_TAIL)
    entry, _ = FileEntry.deserialize(raw, 0)
    return entry


def _safe_join(root: Path, relative: str) -> Path:
    pure = PurePosixPath(relative)
    if not pure.parts or pure.is_absolute() or ".." in pure.parts:
        raise HuffmanError(f"Unsafe path in archive: {relative}")
    return root.joinpath(*pure.parts)


def _traverse(root: Path) -> Iterator[FileEntry]:
    """Yield entries for everything below ``root`` in a stable order."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        base = Path(dirpath)
        for name in dirnames:
            yield FileEntry((base / name).relative_to(root).as_posix(), 0, True)
        for name in sorted(filenames):
            path = base / name
            yield FileEntry(path.relative_to(root).as_posix(), path.stat().st_size, False)


class HuffmanCompressor:
    """Compresses files and directories into Huffman archives and back."""

    def __init__(self) -> None:
        self._tree = HuffmanTree()
        self._stats = CompressionStats()

    @property
    def stats(self) -> CompressionStats:
        """Figures from the most recent operation."""
        return self._stats

    def compress_file(
        self, input_file: str | os.PathLike[str], output_file: str | os.PathLike[str]
    ) -> CompressionStats:
        """Compress one file into ``output_file``."""
        start = perf_counter()
        if not os.fspath(input_file) or not os.fspath(output_file):
            raise ValueError("File paths cannot be empty")
        source = Path(input_file)
        if not source.exists():
            raise FileNotFoundError(f"Input file does not exist: {os.fspath(input_file)}")

        self._tree.build(calculate_frequency(source))
        self._tree.generate_codes()
        tree_data = self._tree.serialize()

        data = source.read_bytes()
        payload = _encode(data, self._tree.encoding_table)
        with open(output_file, "wb") as out:
            _write_header(out, source.name, len(data), len(tree_data), len(payload), False)
            out.write(tree_data)
            out.write(payload)

        original = source.stat().st_size
        compressed = Path(output_file).stat().st_size
        self._stats = CompressionStats(
            original, compressed, _ratio(compressed, original), perf_counter() - start, 1
        )
        return self._stats

    def compress_directory(
        self, input_dir: str | os.PathLike[str], output_file: str | os.PathLike[str]
    ) -> CompressionStats:
        """Compress every file and directory below ``input_dir`` into one archive."""
        start = perf_counter()
        root = Path(input_dir)
        if not root.exists():
            raise FileNotFoundError(f"Input directory does not exist: {os.fspath(input_dir)}")
        if not root.is_dir():
            raise ValueError(f"Input path is not a directory: {os.fspath(input_dir)}")

        entries = list(_traverse(root))
        per_file: dict[str, Counter[int]] = {}
        total: Counter[int] = Counter()
        for entry in entries:
            if not entry.is_directory:
                counts = calculate_frequency(root / entry.relative_path)
                per_file[entry.relative_path] = counts
                total.update(counts)

        self._tree.build(total)
        self._tree.generate_codes()
        codes = self._tree.encoding_table
        tree_data = self._tree.serialize()

        for entry in entries:
            if not entry.is_directory:
                counts = per_file[entry.relative_path]
                entry.file_size = sum(counts.values())
                entry.compressed_size = (_encoded_bits(counts, codes) + 7) // 8

        original = sum(entry.file_size for entry in entries)
        data_size = sum(entry.compressed_size for entry in entries)
        with open(output_file, "wb") as out:
            _write_header(out, os.fspath(input_dir), original, len(tree_data), data_size, True)
            out.write(tree_data)
            out.write(_U32.pack(len(entries)))
            for entry in entries:
                out.write(entry.serialize())
            for entry in entries:
                if not entry.is_directory:
                    data = (root / entry.relative_path).read_bytes()
                    out.write(_encode(data, codes))

        compressed = Path(output_file).stat().st_size
        self._stats = CompressionStats(
            original,
            compressed,
            _ratio(compressed, original),
            perf_counter() - start,
            len(entries),
        )
        return self._stats

    def decompress(
        self, input_file: str | os.PathLike[str], output_dir: str | os.PathLike[str]
    ) -> CompressionStats:
        """Restore the contents of archive ``input_file`` below ``output_dir``."""
        start = perf_counter()
        source = Path(input_file)
        if not source.exists():
            raise FileNotFoundError(f"Input file does not exist: {os.fspath(input_file)}")
        out_root = Path(output_dir)
        out_root.mkdir(parents=True, exist_ok=True)

        with open(source, "rb") as handle:
            header = _read_header(handle)
            self._tree.deserialize(_read_exact(handle, header.tree_size), 0)
            root = self._tree.root

            if header.is_directory:
                (entry_count,) = _U32.unpack(_read_exact(handle, _U32.size))
                entries = [_read_entry(handle) for _ in range(entry_count)]
                for entry in entries:
                    target = _safe_join(out_root, entry.relative_path)
                    if entry.is_directory:
                        target.mkdir(parents=True, exist_ok=True)
                        continue
                    target.parent.mkdir(parents=True, exist_ok=True)
                    packed = _read_exact(handle, entry.compressed_size)
                    target.write_bytes(_decode(packed, root, entry.file_size))
                count = len(entries)
            else:
                target = _safe_join(out_root, header.original_path)
                target.write_bytes(_decode(handle.read(), root, header.original_size))
                count = 1

        compressed = source.stat().st_size
        self._stats = CompressionStats(
            header.original_size,
            compressed,
            _ratio(compressed, header.original_size),
            perf_counter() - start,
            count,
        )
        return self._stats