"""Tests for the tessera command-line tool."""

import json
from pathlib import Path

import pytest

from tessera_cli.cli import main


def write_puzzle(directory: Path, data: dict) -> Path:
    path = directory / "puzzle.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def puzzle_file(tmp_path: Path) -> Path:
    return write_puzzle(tmp_path, {"board": {"type": "rect", "w": 113, "h": 123}, "counts": {"square_30": 2}})


def test_blueprint_svg(puzzle_file: Path, tmp_path: Path, capsys) -> None:
    output = tmp_path / "out" / "level.svg"
    main(["blueprint", str(puzzle_file), str(output)])
    svg = output.read_text(encoding="utf-8")
    assert svg.startswith("<svg")
    assert 'width="1110"' in svg
    assert "Blueprint written" in capsys.readouterr().out


def test_blueprint_png_scale(puzzle_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "level.png"
    main(["blueprint", str(puzzle_file), str(output), "--px-per-mm", "2"])
    assert output.read_bytes()[:4] == b"\x89PNG"


def test_blueprint_rejects_unknown_format(puzzle_file: Path, tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as info:
        main(["blueprint", str(puzzle_file), str(tmp_path / "level.pdf")])
    assert info.value.code == 1
    assert "Unsupported output format" in capsys.readouterr().err


def test_shapes_file_relative_to_puzzle(tmp_path: Path, capsys) -> None:
    (tmp_path / "shapes.json").write_text(
        json.dumps({"shapes": [{"id": "tiny", "type": "circle", "d": 5}]}), encoding="utf-8"
    )
    puzzle = write_puzzle(
        tmp_path,
        {"board": {"type": "rect", "w": 50, "h": 50}, "counts": {"tiny": 2}, "shapes_file": "shapes.json"},
    )
    main(["validate", str(puzzle)])
    assert "OK: 2 pieces" in capsys.readouterr().out


def test_validate_reports_issues(tmp_path: Path, capsys) -> None:
    puzzle = write_puzzle(
        tmp_path,
        {
            "board": {"type": "rect", "w": 113, "h": 123},
            "pieces": [
                {"id": "square_30", "position": [50, 50]},
                {"id": "square_30", "position": [55, 50]},
            ],
        },
    )
    with pytest.raises(SystemExit) as info:
        main(["validate", str(puzzle)])
    assert info.value.code == 2
    assert "Piece 1 overlaps piece 2" in capsys.readouterr().out


def test_missing_puzzle(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as info:
        main(["validate", str(tmp_path / "missing.json")])
    assert info.value.code == 1
    assert "Puzzle file not found" in capsys.readouterr().err


def test_unknown_shape(tmp_path: Path, capsys) -> None:
    puzzle = write_puzzle(tmp_path, {"board": {"type": "rect", "w": 10, "h": 10}, "counts": {"ghost": 1}})
    with pytest.raises(SystemExit):
        main(["validate", str(puzzle)])
    assert "ghost" in capsys.readouterr().err


def test_catalog_listing(capsys) -> None:
    main(["catalog"])
    out = capsys.readouterr().out
    assert "circle_d30" in out
    assert "Circle (diameter 30 mm)" in out


def test_no_command(capsys) -> None:
    with pytest.raises(SystemExit):
        main([])
