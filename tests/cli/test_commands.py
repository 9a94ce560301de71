import json

import pytest

from moontide import __version__
from moontide.cli.main import main


def _run_json(capsys, argv):
    code = main(argv + ["--json"])
    payload = json.loads(capsys.readouterr().out)
    return code, payload


def test_version(capsys):
    assert main(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: moontide" in capsys.readouterr().out


def test_phase_json(capsys, empty_config):
    code, payload = _run_json(
        capsys, ["phase", "--at", "2024-12-01T06:21:00Z", "--config", str(empty_config)]
    )
    assert code == 0
    assert payload["ok"] is True
    assert payload["command"] == "phase"
    assert payload["data"]["label"] == "new"
    assert payload["data"]["lunar_day"] == 1
    assert payload["data"]["tier"] == "simple"
    assert payload["data"]["phase"] == pytest.approx(0.0, abs=1e-9)


def test_phase_precise_tier(capsys, empty_config):
    code, payload = _run_json(
        capsys,
        ["phase", "--tier", "precise", "--at", "2000-01-06T18:14:00Z", "--config", str(empty_config)],
    )
    assert code == 0
    assert payload["data"]["tier"] == "precise"
    assert payload["data"]["phase"] == pytest.approx(0.0, abs=1e-9)


def test_phase_text(capsys, empty_config):
    code = main(["phase", "--at", "2024-12-15T12:00:00", "--config", str(empty_config)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Illumination:" in out
    assert "망 (Full Moon)" in out


def test_position_json(capsys, empty_config):
    code, payload = _run_json(
        capsys,
        ["position", "--lat", "37.5", "--lon", "127.0", "--at", "2025-02-01T00:00:00Z", "--config", str(empty_config)],
    )
    assert code == 0
    data = payload["data"]
    assert -90.0 <= data["altitude_deg"] <= 90.0
    assert 0.0 <= data["azimuth_deg"] < 360.0
    assert data["is_visible"] == (data["altitude_deg"] > 0)


def test_position_uses_site_when_no_location(capsys, empty_config):
    code = main(["position", "--config", str(empty_config)])
    assert code == 0
    assert "Altitude:" in capsys.readouterr().out


def test_position_rejects_bad_latitude(capsys, empty_config):
    code = main(["position", "--lat", "95", "--lon", "0", "--config", str(empty_config)])
    assert code == 2
    assert "Latitude out of range" in capsys.readouterr().err


def test_position_requires_both_coordinates(capsys, empty_config):
    code, payload = _run_json(capsys, ["position", "--lat", "37", "--config", str(empty_config)])
    assert code == 2
    assert payload["ok"] is False
    assert payload["error"]["code"] == "invalid_argument"


def test_tide_named_point(capsys, empty_config):
    code, payload = _run_json(
        capsys, ["tide", "--point", "busan", "--at", "2025-03-01T09:00:00Z", "--config", str(empty_config)]
    )
    assert code == 0
    data = payload["data"]
    assert data["reference_point"]["key"] == "busan"
    assert data["tidal_state"]["state"] in ("high", "low")
    assert data["tidal_state"]["offset_minutes"] == 70
    assert data["tidal_range"]["range"] in ("spring", "neap", "intermediate")


def test_tide_from_coordinate(capsys, empty_config):
    code, payload = _run_json(
        capsys, ["tide", "--lat", "37.4", "--lon", "126.6", "--config", str(empty_config)]
    )
    assert code == 0
    assert payload["data"]["reference_point"] is None
    assert payload["data"]["tidal_state"]["offset_minutes"] == pytest.approx(-33.6)


def test_tide_unknown_point(capsys, empty_config):
    code = main(["tide", "--point", "atlantis", "--config", str(empty_config)])
    assert code == 2
    assert "Unknown reference point: atlantis" in capsys.readouterr().err


def test_range(capsys, empty_config):
    code, payload = _run_json(capsys, ["range", "--config", str(empty_config)])
    assert code == 0
    assert 0.0 <= payload["data"]["separation_deg"] <= 180.0


def test_clock_text(capsys, empty_config):
    code = main(
        ["clock", "--tier", "precise", "--at", "2025-02-01T00:00:00Z", "--point", "mokpo", "--config", str(empty_config)]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert "Moon Clock" in out
    assert "RA:" in out
    assert "목포 (-2:00)" in out


def test_sweep(capsys, empty_config):
    code, payload = _run_json(
        capsys,
        ["sweep", "--at", "2025-01-01T00:00:00Z", "--step", "hour", "--count", "3", "--config", str(empty_config)],
    )
    assert code == 0
    instants = [row["instant"] for row in payload["data"]]
    assert instants == [
        "2025-01-01T00:00:00+00:00",
        "2025-01-01T01:00:00+00:00",
        "2025-01-01T02:00:00+00:00",
    ]


def test_points_include_custom(capsys, tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[[reference_points]]\nkey = "jeju"\nname = "제주"\noffset_minutes = 10\n',
        encoding="utf-8",
    )
    code, payload = _run_json(capsys, ["points", "--config", str(path)])
    assert code == 0
    keys = [p["key"] for p in payload["data"]]
    assert keys[-1] == "jeju"
    assert "incheon" in keys


def test_missing_config_file(capsys, tmp_path):
    code = main(["phase", "--config", str(tmp_path / "missing.toml")])
    assert code == 1
    assert "Config file not found" in capsys.readouterr().err


def test_invalid_config_value(capsys, tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[clock]\nprecision = "exact"\n', encoding="utf-8")
    code, payload = _run_json(capsys, ["phase", "--config", str(path)])
    assert code == 2
    assert payload["error"]["code"] == "invalid_config"


def test_doctor_ok(capsys, empty_config):
    assert main(["doctor", "--config", str(empty_config)]) == 0
    assert "Configuration ready." in capsys.readouterr().out


def test_doctor_reports_bad_timezone(capsys, tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[clock]\ntimezone = "Nowhere/Land"\n', encoding="utf-8")
    code, payload = _run_json(capsys, ["doctor", "--config", str(path)])
    assert code == 1
    assert payload["data"]["checks"]["timezone"]["ok"] is False
    assert payload["data"]["checks"]["config"]["ok"] is True
