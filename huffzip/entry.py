"""Archive entries describing one file or directory."""

from __future__ import annotations

from dataclasses import dataclass

_MAX_PATH = 0xFFFF
_U64_MAX = 0xFFFFFFFFFFFFFFFF


def _u64(value: int, what: str) -> bytes:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{what} out of range: {value}")
    return value.to_bytes(8, "big")


@dataclass
class FileEntry:
    """A path relative to the archive root with its sizes.

    Serialized as a big-endian 2-byte path length, the path, the 8-byte
    file size, the 8-byte compressed size and a 1-byte directory flag.
    """

    relative_path: str = ""
    file_size: int = 0
    is_directory: bool = False
    compressed_size: int = 0

    def serialize(self) -> bytes:
        """Return the binary form of this entry."""
        path = self.relative_path.encode("utf-8", "surrogateescape")
        if len(path) > _MAX_PATH:
            raise ValueError("Path too long")
        return b"".join(
            (
                len(path).to_bytes(2, "big"),
                path,
                _u64(self.file_size, "File size"),
                _u64(self.compressed_size, "Compressed size"),
                b"\x01" if self.is_directory else b"\x00",
            )
        )

    @classmethod
    def deserialize(cls, data: bytes, offset: int = 0) -> tuple[FileEntry, int]:
        """Parse an entry at ``offset``; return it with the offset just past it."""
        view = memoryview(data)
        if offset + 2 > len(view):
            raise ValueError("Insufficient data for path length")
        path_length = int.from_bytes(view[offset:offset + 2], "big")
        offset += 2

        if offset + path_length > len(view):
            raise ValueError("Insufficient data for path")
        path = bytes(view[offset:offset + path_length]).decode("utf-8", "surrogateescape")
        offset += path_length

        if offset + 8 > len(view):
            raise ValueError("Insufficient data for file size")
        file_size = int.from_bytes(view[offset:offset + 8], "big")
        offset += 8

        if offset + 8 > len(view):
            raise ValueError("Insufficient data for compressed size")
        compressed_size = int.from_bytes(view[offset:offset + 8], "big")
        offset += 8

        if offset >= len(view):
            raise ValueError("Insufficient data for directory flag")
        is_directory = view[offset] != 0
        offset += 1

        return cls(path, file_size, is_directory, compressed_size), offset