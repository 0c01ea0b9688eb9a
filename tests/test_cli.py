from huffzip.cli import main

TEXT = b"the quick brown fox jumps over the lazy dog\n" * 30


def test_wrong_argument_count_prints_usage(capsys):
    assert main(["compress-file", "only-one"]) == 1
    out = capsys.readouterr().out
    assert "Usage: huffzip <command> <input> <output>" in out
    assert "compress-dir" in out


def test_unknown_command(tmp_path, capsys):
    assert main(["bogus", str(tmp_path / "a"), str(tmp_path / "b")]) == 1
    captured = capsys.readouterr()
    assert "Unknown command: bogus" in captured.err
    assert "Usage:" in captured.out


def test_file_round_trip(tmp_path, capsys):
    source = tmp_path / "input.txt"
    source.write_bytes(TEXT)
    archive = tmp_path / "output.huff"
    assert main(["compress-file", str(source), str(archive)]) == 0
    out = capsys.readouterr().out
    assert "Compression completed!" in out
    assert f"Original size: {len(TEXT)} bytes" in out

    assert main(["decompress", str(archive), str(tmp_path / "restored")]) == 0
    assert "Decompression completed!" in capsys.readouterr().out
    assert (tmp_path / "restored" / "input.txt").read_bytes() == TEXT


def test_directory_round_trip(tmp_path, capsys):
    root = tmp_path / "mydir"
    (root / "inner").mkdir(parents=True)
    (root / "one.txt").write_bytes(TEXT)
    (root / "inner" / "two.txt").write_bytes(TEXT[:50])
    archive = tmp_path / "archive.huff"
    assert main(["compress-dir", str(root), str(archive)]) == 0
    out = capsys.readouterr().out
    assert "Directory compression completed!" in out
    assert "Files compressed: 3" in out

    assert main(["decompress", str(archive), str(tmp_path / "outputdir")]) == 0
    assert (tmp_path / "outputdir" / "one.txt").read_bytes() == TEXT
    assert (tmp_path / "outputdir" / "inner" / "two.txt").read_bytes() == TEXT[:50]


def test_missing_input_reports_error(tmp_path, capsys):
    status = main(["compress-file", str(tmp_path / "missing.txt"), str(tmp_path / "o.huff")])
    assert status == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert "Input file does not exist" in err


def test_invalid_archive_reports_error(tmp_path, capsys):
    bogus = tmp_path / "bogus.huff"
    bogus.write_bytes(b"garbage data here")
    assert main(["decompress", str(bogus), str(tmp_path / "out")]) == 1
    assert "Error: Invalid magic number" in capsys.readouterr().err