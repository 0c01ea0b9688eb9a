"""Bit-level reading and writing of binary files."""

from __future__ import annotations

from enum import Enum
from os import PathLike
from typing import BinaryIO


class Mode(Enum):
    """Direction of a :class:`BitStream`."""

    READ = "read"
    WRITE = "write"


class BitStream:
    """Reads or writes a file one bit at a time, most significant bit first.

    In write mode an incomplete final byte is padded with zero bits when the
    stream is flushed or closed.
    """

    def __init__(self, path: str | PathLike[str], mode: Mode) -> None:
        if not isinstance(mode, Mode):
            raise ValueError(f"Invalid mode: {mode!r}")
        self._mode = mode
        self._buffer = 0
        self._closed = False
        if mode is Mode.READ:
            self._file: BinaryIO = open(path, "rb")
            # Position 8 marks an exhausted buffer until a byte is loaded.
            self._position = 8
            self._load()
        else:
            self._file = open(path, "wb")
            self._position = 0

    def __enter__(self) -> BitStream:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require(self, mode: Mode) -> None:
        if self._closed:
            raise ValueError("BitStream is closed")
        if self._mode is not mode:
            raise ValueError(f"BitStream not in {mode.value} mode")

    def _load(self) -> None:
        chunk = self._file.read(1)
        if chunk:
            self._buffer = chunk[0]
            self._position = 0

    def _write_buffer(self) -> None:
        self._file.write(bytes((self._buffer,)))
        self._buffer = 0
        self._position = 0

    def write_bit(self, bit: bool) -> None:
        """Append one bit to the stream."""
        self._require(Mode.WRITE)
        if bit:
            self._buffer |= 0x80 >> self._position
        self._position += 1
        if self._position == 8:
            self._write_buffer()

    def read_bit(self) -> bool:
        """Return the next bit; raise EOFError when none is left."""
        self._require(Mode.READ)
        if self.at_eof:
            raise EOFError("Unexpected end of file")
        bit = bool(self._buffer & (0x80 >> self._position))
        self._position += 1
        if self._position == 8:
            self._load()
        return bit

    def write_byte(self, byte: int) -> None:
        """Append eight bits holding ``byte``."""
        self._require(Mode.WRITE)
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"Byte out of range: {byte}")
        for shift in range(7, -1, -1):
            self.write_bit(bool((byte >> shift) & 1))

    def read_byte(self) -> int:
        """Read the next eight bits as an unsigned byte."""
        self._require(Mode.READ)
        value = 0
        for _ in range(8):
            value = (value << 1) | self.read_bit()
        return value

    def flush(self) -> None:
        """Write out a partially filled byte, padded with zero bits."""
        if self._closed or self._mode is not Mode.WRITE or self._position == 0:
            return
        self._write_buffer()

    @property
    def pending_bits(self) -> int:
        """Number of bits buffered but not yet written."""
        return self._position if self._mode is Mode.WRITE else 0

    def close(self) -> None:
        """Flush any pending bits and close the file."""
        if self._closed:
            return
        if self._mode is Mode.WRITE:
            self.flush()
        self._file.close()
        self._closed = True

    @property
    def at_eof(self) -> bool:
        """True in read mode once every bit of the file has been read."""
        return self._mode is Mode.READ and self._position >= 8