import pytest

from huffzip.entry import FileEntry


def test_wire_format_of_simple_entry():
    entry = FileEntry("a", 1, False)
    expected = b"\x00\x01a" + b"\x00" * 7 + b"\x01" + b"\x00" * 8 + b"\x00"
    assert entry.serialize() == expected


def test_round_trip_preserves_all_fields():
    entry = FileEntry("docs/readme.txt", 12345, False, 678)
    data = entry.serialize()
    restored, offset = FileEntry.deserialize(data, 0)
    assert restored == entry
    assert offset == len(data)


def test_directory_round_trip():
    entry = FileEntry("sub/dir", 0, True)
    restored, _ = FileEntry.deserialize(entry.serialize())
    assert restored.is_directory
    assert restored.relative_path == "sub/dir"


def test_non_ascii_path_round_trip():
    entry = FileEntry("目录/文件.txt", 9, False)
    restored, _ = FileEntry.deserialize(entry.serialize())
    assert restored == entry


def test_consecutive_entries_are_read_in_order():
    entries = [FileEntry("a", 3), FileEntry("b", 0, True), FileEntry("c/d", 7, False, 2)]
    data = b"".join(e.serialize() for e in entries)
    offset = 0
    restored = []
    while offset < len(data):
        entry, offset = FileEntry.deserialize(data, offset)
        restored.append(entry)
    assert restored == entries


def test_any_nonzero_flag_means_directory():
    data = bytearray(FileEntry("x", 0, False).serialize())
    data[-1] = 2
    entry, _ = FileEntry.deserialize(bytes(data))
    assert entry.is_directory


def test_large_sizes_round_trip():
    entry = FileEntry("big", 2**64 - 1, False, 2**40)
    restored, _ = FileEntry.deserialize(entry.serialize())
    assert restored.file_size == 2**64 - 1
    assert restored.compressed_size == 2**40


def test_defaults_round_trip():
    entry = FileEntry()
    restored, offset = FileEntry.deserialize(entry.serialize())
    assert restored == entry
    assert offset == len(entry.serialize())


def test_path_too_long():
    with pytest.raises(ValueError, match="Path too long"):
        FileEntry("x" * 65536).serialize()


def test_longest_path_is_accepted():
    entry = FileEntry("x" * 65535)
    restored, _ = FileEntry.deserialize(entry.serialize())
    assert restored.relative_path == entry.relative_path


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        FileEntry("a", -1).serialize()


def test_offset_past_end_is_reported():
    data = FileEntry("abc").serialize()
    with pytest.raises(ValueError, match="path length"):
        FileEntry.deserialize(data, len(data))