"""Command-line front end for compressing and decompressing archives."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from huffzip.compressor import HuffmanCompressor
from huffzip.tree import HuffmanError

_PROG = "huffzip"


def _usage(prog: str) -> str:
    return "\n".join(
        (
            f"Usage: {prog} <command> <input> <output>",
            "Commands:",
            "  compress-file   - Compress a single file",
            "  compress-dir    - Compress a directory",
            "  decompress      - Decompress a file",
            "",
            "Examples:",
            f"  {prog} compress-file input.txt output.huff",
            f"  {prog} compress-dir mydir archive.huff",
            f"  {prog} decompress archive.huff outputdir",
        )
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3:
        print(_usage(_PROG))
        return 1
    command, source, target = args
    compressor = HuffmanCompressor()
    try:
        if command == "compress-file":
            stats = compressor.compress_file(source, target)
            print("Compression completed!")
            print(f"Original size: {stats.original_size} bytes")
            print(f"Compressed size: {stats.compressed_size} bytes")
            print(f"Compression ratio: {stats.compression_ratio:g}%")
            print(f"Compression time: {stats.compression_time:g} seconds")
        elif command == "compress-dir":
            stats = compressor.compress_directory(source, target)
            print("Directory compression completed!")
            print(f"Files compressed: {stats.file_count}")
            print(f"Original size: {stats.original_size} bytes")
            print(f"Compressed size: {stats.compressed_size} bytes")
            print(f"Compression ratio: {stats.compression_ratio:g}%")
            print(f"Compression time: {stats.compression_time:g} seconds")
        elif command == "decompress":
            stats = compressor.decompress(source, target)
            print("Decompression completed!")
            print(f"Decompressed size: {stats.original_size} bytes")
            print(f"Decompression time: {stats.compression_time:g} seconds")
        else:
            print(f"Unknown command: {command}", file=sys.stderr)
            print(_usage(_PROG))
            return 1
    except (OSError, ValueError, HuffmanError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())