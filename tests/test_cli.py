"""Tests for the command-line interface."""

from pathlib import Path

from matrixeditor.__main__ import main, render_triangle
from matrixeditor.model.io import IOManager
from matrixeditor.model.matrix import ScalarKind
from matrixeditor.model.state import MatrixData


def test_render_triangle_layout() -> None:
    data = MatrixData(ScalarKind.INT, ["a", "bb", "c"], name="demo")
    data.update_value(ScalarKind.INT, 0, 0, 5)

    lines = render_triangle(data).splitlines()
    assert lines[0] == "demo (int, 3x3)"
    assert lines[1].split() == ["c", "bb", "a"]
    assert lines[2].split() == ["a", "5", "0", "0"]
    assert lines[3].split() == ["bb", "0", "0"]
    # (2, 2) holds the mirrored 5 but lies outside the triangle
    assert lines[4].split() == ["c", "0"]


def test_render_bool_and_empty() -> None:
    data = MatrixData(ScalarKind.BOOL, ["p", "q"])
    data.update_value(ScalarKind.BOOL, 0, 1, True)
    assert render_triangle(data).splitlines()[2].split() == ["p", "-", "x"]
    assert render_triangle(MatrixData(name="none")) == "none (bool, 0x0)"


def test_new_set_show(tmp_path: Path, capsys) -> None:
    path = tmp_path / "m.h5"
    assert main(["new", str(path), "a", "b", "c", "--kind", "int", "--name", "cli"]) == 0
    assert main(["set", str(path), "0", "0", "5"]) == 0
    capsys.readouterr()

    assert main(["show", str(path)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "cli (int, 3x3)"
    assert IOManager.load_matrix(path).read(2, 2) == 5


def test_add_rename_remove(tmp_path: Path) -> None:
    path = tmp_path / "m.h5"
    main(["new", str(path), "a", "--kind", "float"])
    main(["set", str(path), "0", "0", "1.5"])
    assert main(["add", str(path), "b", "c"]) == 0
    assert main(["rename", str(path), "2", "z"]) == 0
    assert main(["remove", str(path), "1"]) == 0

    data = IOManager.load_matrix(path)
    assert data.elements.names() == ["a", "z"]
    assert data.read(0, 0) == 1.5


def test_export_import(tmp_path: Path) -> None:
    h5 = tmp_path / "m.h5"
    js = tmp_path / "m.json"
    main(["new", str(h5), "a", "b"])
    main(["set", str(h5), "0", "1", "x"])
    assert main(["export", str(h5), str(js)]) == 0

    back = tmp_path / "back.h5"
    assert main(["import", str(js), str(back)]) == 0
    assert IOManager.load_matrix(back).read(0, 1) is True


def test_errors_exit_with_one(tmp_path: Path, capsys) -> None:
    path = tmp_path / "m.h5"
    main(["new", str(path), "a", "b", "--kind", "int"])
    capsys.readouterr()

    assert main(["set", str(path), "0", "5", "1"]) == 1
    assert "out of range" in capsys.readouterr().err

    assert main(["set", str(path), "0", "0", "abc"]) == 1
    assert "Cannot read" in capsys.readouterr().err

    assert main(["show", str(tmp_path / "missing.h5")]) == 1


def test_show_without_path_prints_example(capsys) -> None:
    assert main(["show"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "Collision Layers (bool, 5x5)"


def test_new_appends_default_extension(tmp_path: Path, capsys) -> None:
    assert main(["new", str(tmp_path / "layers"), "a"]) == 0
    assert f"Saved to {tmp_path / 'layers.h5'}" in capsys.readouterr().out
    assert (tmp_path / "layers.h5").exists()


def test_int_too_large_for_a_cell(tmp_path: Path, capsys) -> None:
    path = tmp_path / "m.h5"
    main(["new", str(path), "a", "--kind", "int"])
    capsys.readouterr()

    assert main(["set", str(path), "0", "0", "99999999999999999999999"]) == 1
    assert "64-bit" in capsys.readouterr().err
    assert IOManager.load_matrix(path).read(0, 0) == 0


def test_export_and_import_need_json(tmp_path: Path, capsys) -> None:
    h5 = tmp_path / "m.h5"
    main(["new", str(h5), "a"])
    capsys.readouterr()

    assert main(["export", str(h5), str(tmp_path / "copy.h5")]) == 1
    assert "export destination must be a .json file" in capsys.readouterr().err
    assert not (tmp_path / "copy.h5").exists()

    assert main(["import", str(h5), str(tmp_path / "back.h5")]) == 1
    assert "import source must be a .json file" in capsys.readouterr().err


def test_verbose_log_keeps_stdout_clean(tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "run.log"
    assert main(["-v", "--log-file", str(log_file), "show"]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines()[0] == "Collision Layers (bool, 5x5)"
    assert "Logging initialized" not in captured.out
    assert "Logging initialized" in captured.err
    assert "Importing matrix from JSON" in log_file.read_text(encoding="utf-8")
