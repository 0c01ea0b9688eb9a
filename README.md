# huffzip

A small Huffman-coding compressor. It compresses a single file or a whole
directory tree into one archive and restores it again. It has no
dependencies outside the Python standard library.

## Installation

```
pip install .
```

## Command line

```
huffzip <command> <input> <output>
```

| Command         | Input               | Output                              |
|-----------------|---------------------|-------------------------------------|
| `compress-file` | a file              | the archive to write                |
| `compress-dir`  | a directory         | the archive to write                |
| `decompress`    | an archive          | the directory to restore into       |

Examples:

```
huffzip compress-file input.txt output.huff
huffzip compress-dir mydir archive.huff
huffzip decompress output.huff outputdir
```

After each run a short summary is printed: sizes in bytes, the compressed
size as a percentage of the original, and the elapsed time. For
`compress-dir` the number of archive entries (files and directories) is
printed as well.

Decompressing creates the output directory if needed. A single-file archive
is restored under its original file name inside that directory; a directory
archive is restored with its relative layout. Entries whose stored path is
absolute or contains `..` are refused.

With the wrong number of arguments or an unknown command, the usage text is
printed and the exit status is 1. Any other failure prints `Error: <message>`
to standard error and also exits with status 1.

## Library use

```python
from huffzip.compressor import HuffmanCompressor

compressor = HuffmanCompressor()
stats = compressor.compress_file("input.txt", "output.huff")
print(stats.original_size, stats.compressed_size, stats.compression_ratio)

compressor.compress_directory("mydir", "archive.huff")
compressor.decompress("archive.huff", "restored")
print(compressor.stats.file_count)
```

`compress_file`, `compress_directory` and `decompress` each return a frozen
`CompressionStats` (`original_size`, `compressed_size`, `compression_ratio`,
`compression_time`, `file_count`), which also stays available as
`HuffmanCompressor.stats`. `huffzip.compressor.calculate_frequency(path)`
returns a `collections.Counter` of the byte values in a file.

Errors are raised as exceptions: `FileNotFoundError` for a missing input,
`ValueError` for bad arguments (for example an input to
`compress_directory` that is not a directory), and
`huffzip.tree.HuffmanError` for damaged or foreign archives.

The building blocks can be used on their own:

- `huffzip.tree.HuffmanTree` builds a code from a mapping of byte value to
  count (`build`), fills its `encoding_table` (`generate_codes`), encodes a
  byte (`encode`), and turns the tree into bytes and back (`serialize`,
  `deserialize`). A tree with only one symbol gives that symbol the code `0`.
- `huffzip.bitstream.BitStream` reads or writes a file one bit at a time,
  most significant bit first, in `Mode.READ` or `Mode.WRITE`. A partial last
  byte is padded with zero bits on `flush` or `close`. It is a context
  manager; reading past the end raises `EOFError`.
- `huffzip.entry.FileEntry` is the record kept for each path in a directory
  archive, with `serialize` and the class method `deserialize`.

```python
from collections import Counter
from huffzip.tree import HuffmanTree

data = b"abracadabra"
tree = HuffmanTree()
tree.build(Counter(data))
tree.generate_codes()
bits = "".join(tree.encode(b) for b in data)
```

## Archive layout

All archives start with a little-endian header: magic number `HUFF`
(4 bytes), version `1` (1 byte), total original size (8), tree size (4),
compressed data size (4), a directory flag (1), the length of the stored
name (2), the name itself, and 2 reserved zero bytes. The serialized tree
follows.

- Single file: the packed code bits of the file.
- Directory: a 4-byte little-endian entry count, the entries (each a
  big-endian path length, path, file size, compressed size and directory
  flag), then the packed code bits of each file in entry order, each file
  padded to a whole byte.

## What it does not do

- Empty input cannot be compressed: a zero-byte file, or a directory with no
  file content at all, raises `ValueError`.
- Files are read into memory whole; there is no streaming of large inputs.
- Archives carry no checksum, so corruption is only noticed when decoding
  runs out of data or walks off the tree.
- There is no command to list or test an archive without extracting it, and
  no way to add to an existing archive.
- File permissions, timestamps and symbolic links are not recorded.

## Running the tests

```
pip install ".[test]"
pytest
```