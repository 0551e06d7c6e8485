import json

import pytest

from spirogen_cli import main, parse_args


def test_cli_prints_pattern_points(capsys):
    assert main(["C(10)", "C(3)", "--pen-radius", "0.5"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data["points"]) == 300
    assert data["points"][0] == pytest.approx([11.5, 0.0], abs=1e-3)


def test_cli_reports_request_errors(capsys):
    assert main(["C(3)", "C(5)", "--inside"]) == 2
    assert json.loads(capsys.readouterr().out) == {"message": "wheel does not fit inside guide"}

    assert main(["C(3)", "R(1,0.2)", "--lang", "fr", "--pen-radius", "3"]) == 2
    message = json.loads(capsys.readouterr().out)["message"]
    assert message == "pen_radius est hors de l'intervalle [0, 1]"


def test_cli_reports_bad_shape_expression(capsys):
    assert main(["X(3)", "C(1)"]) == 2
    assert "Unrecognized shape expression" in json.loads(capsys.readouterr().out)["message"]


def test_cli_reads_config_file(tmp_path, capsys):
    path = tmp_path / "deltoid.json"
    path.write_text(
        json.dumps(
            {
                "guide": "Circle",
                "wheel": "Circle",
                "guide_radius": 3,
                "wheel_radius": 1,
                "pen_radius": 1,
                "pen_theta": 0,
                "inside": True,
            }
        ),
        encoding="utf-8",
    )
    assert main(["--config", str(path)]) == 0
    points = json.loads(capsys.readouterr().out)["points"]
    assert points[0] == pytest.approx([3.0, 0.0], abs=1e-3)


def test_cli_lists_backends(capsys):
    assert main(["--list-backends"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("numba\t") and "python\tPython" in out


def test_cli_rejects_unknown_backend(capsys):
    assert main(["C(10)", "C(3)", "--backend", "fortran"]) == 2
    assert json.loads(capsys.readouterr().out) == {"message": "Unknown math backend: fortran"}


def test_cli_needs_shapes_or_config():
    with pytest.raises(SystemExit):
        parse_args([])


def test_cli_rejects_infinite_radius_in_config(tmp_path, capsys):
    path = tmp_path / "infinite.json"
    path.write_text(
        json.dumps(
            {
                "guide": "Circle",
                "wheel": "Circle",
                "guide_radius": "inf",
                "wheel_radius": 1,
                "pen_radius": 1,
                "pen_theta": 0,
            }
        ),
        encoding="utf-8",
    )
    assert main(["--config", str(path)]) == 2
    assert json.loads(capsys.readouterr().out) == {"message": "guide_radius is not a number: inf"}
