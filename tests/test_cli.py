import cli


def test_compress_and_decompress_file(tmp_path):
    src = tmp_path / "notes.txt"
    src.write_bytes(b"hello huffman\n" * 20)

    packed = cli.compress_file(src)
    assert packed == tmp_path / "notes.bin"
    assert packed.exists()

    out = cli.decompress_file(packed)
    assert out == tmp_path / "notes_decompressed.txt"
    assert out.read_bytes() == src.read_bytes()


def test_decompress_file_explicit_output(tmp_path):
    src = tmp_path / "empty.txt"
    src.write_bytes(b"")
    packed = cli.compress_file(src)
    out = cli.decompress_file(packed, tmp_path / "restored.txt")
    assert out.read_bytes() == b""


def test_main_compress_then_decompress(tmp_path, capsys):
    src = tmp_path / "data.txt"
    src.write_bytes(b"abracadabra")

    assert cli.main(["compress", str(src)]) == 0
    assert "Compressed" in capsys.readouterr().out

    assert cli.main(["decompress", str(tmp_path / "data.bin")]) == 0
    assert "Decompressed" in capsys.readouterr().out
    assert (tmp_path / "data_decompressed.txt").read_bytes() == b"abracadabra"


def test_main_reports_bad_container(tmp_path, capsys):
    bad = tmp_path / "bad.bin"
    bad.write_bytes(b"not a container")
    assert cli.main(["decompress", str(bad)]) == 1
    assert "Error" in capsys.readouterr().err


def test_main_reports_missing_file(tmp_path, capsys):
    assert cli.main(["compress", str(tmp_path / "missing.txt")]) == 1
    assert "Error" in capsys.readouterr().err
