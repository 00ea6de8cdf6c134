import json

from yarl import cli


def test_prints_map_and_saves(tmp_path, capsys):
    code = cli.main(
        ["--algorithm", "uniform", "--width", "6", "--height", "4", "--save", "--out-dir", str(tmp_path)]
    )
    assert code == 0

    saved = tmp_path / "floor-001.txt"
    assert saved.exists()
    expected = "......\n......\n...@..\n......"
    assert saved.read_text(encoding="utf-8") == expected + "\n"
    assert capsys.readouterr().out.strip() == expected


def test_json_summary_after_descent(capsys):
    code = cli.main(["--seed", "7", "--json", "--descend", "1"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["floor"] == 2
    assert data["stairs_down"] is not None


def test_bad_text_map_reports_error(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("..\n.x\n", encoding="utf-8")
    assert cli.main(["--text", str(path)]) == 2
    assert capsys.readouterr().out == ""


def test_missing_text_file(tmp_path):
    assert cli.main(["--text", str(tmp_path / "nope.txt")]) == 2


def test_default_out_dir():
    assert cli.default_out_dir().name == "floors"
