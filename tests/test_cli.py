from arith.cli import main

def test_commands_from_argv(capsys):
    assert main(["parse 2^3^2", "evaluate", "save_pst"]) == 0
    assert capsys.readouterr().out == "success\n512\n(2,(3,2)^)^\n"

def test_command_file(tmp_path):
    src = tmp_path / "in.txt"
    dst = tmp_path / "out.txt"
    src.write_text("load_prf *(a,(+(b,1)))\nevaluate a=2,b=3\nsave_pst\n")
    assert main(["--input", str(src), "--output", str(dst)]) == 0
    assert dst.read_text() == "success\n8\n(a,((b,1)+))*\n"

def test_command_file_to_stdout(tmp_path, capsys):
    src = tmp_path / "in.txt"
    src.write_text("parse 5!\nevaluate\n")
    assert main(["--input", str(src), "--output", "-"]) == 0
    assert capsys.readouterr().out == "success\n120\n"

def test_default_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "input.txt").write_text("parse 7%3\nevaluate\n")
    assert main([]) == 0
    assert (tmp_path / "output.txt").read_text() == "success\n1\n"

def test_missing_input_file(tmp_path, capsys):
    assert main(["--input", str(tmp_path / "nope.txt")]) == 1
    assert "can't open file" in capsys.readouterr().err
