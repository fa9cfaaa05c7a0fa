import cli


def test_encode_then_decode(tmp_path, capsys):
    src = tmp_path / "in.txt"
    packed = tmp_path / "in.huf"
    out = tmp_path / "out.txt"
    src.write_bytes(b"how much wood would a woodchuck chuck")

    assert cli.main(["-e", str(src), str(packed)]) == 0
    assert cli.main(["-d", str(packed), str(out)]) == 0
    assert out.read_bytes() == src.read_bytes()
    assert capsys.readouterr().out == ""


def test_failure_reported_as_text(tmp_path, capsys):
    assert cli.main(["-e", str(tmp_path / "missing"), str(tmp_path / "out")]) == 0
    assert "Error opening input file." in capsys.readouterr().out


def test_empty_input_reported(tmp_path, capsys):
    src = tmp_path / "empty"
    src.write_bytes(b"")
    assert cli.main(["-d", str(src), str(tmp_path / "out")]) == 0
    assert "Empty input file." in capsys.readouterr().out


def test_bad_usage_still_exits_zero(capsys):
    assert cli.main(["-x", "a", "b"]) == 0
    assert "usage:" in capsys.readouterr().err


def test_mode_is_required(capsys):
    assert cli.main(["a", "b"]) == 0
    assert "usage:" in capsys.readouterr().err


def test_modes_are_exclusive(capsys):
    assert cli.main(["-e", "-d", "a", "b"]) == 0
    assert "usage:" in capsys.readouterr().err
