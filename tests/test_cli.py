import json

import pytest

from stock_agent import cli
from stock_agent.config import Settings
from conftest import make_input


def write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_single_file_in_mock_mode(tmp_path, capsys):
    input_file = write(tmp_path / "input.json", make_input("CLI1"))
    output_file = tmp_path / "out" / "report.json"

    exit_code = cli.main([input_file, "-o", str(output_file), "--mock"])

    assert exit_code == 0
    report = json.loads(output_file.read_text(encoding="utf-8"))
    assert report["recommendation"] == "Watchlist"
    assert report["metadata"]["stockSymbol"] == "CLI1"
    assert "ANALYSIS SUMMARY" in capsys.readouterr().out


def test_list_file_runs_batch(tmp_path):
    invalid = make_input("BAD")
    del invalid["stock"]["name"]
    input_file = write(tmp_path / "batch.json", [make_input("A1"), invalid, make_input("A3")])
    output_file = tmp_path / "batch-out.json"

    exit_code = cli.main([input_file, "-o", str(output_file), "--mock"])

    results = json.loads(output_file.read_text(encoding="utf-8"))
    assert exit_code == 1
    assert [r["success"] for r in results] == [True, False, True]


def test_several_files_keep_their_slots(tmp_path):
    first = write(tmp_path / "a.json", make_input("F1"))
    missing = str(tmp_path / "missing.json")
    third = write(tmp_path / "c.json", make_input("F3"))
    output_file = tmp_path / "many.json"

    cli.main([first, missing, third, "-o", str(output_file), "--mock"])

    results = json.loads(output_file.read_text(encoding="utf-8"))
    assert [r["success"] for r in results] == [True, False, True]
    assert results[1]["error"].startswith("File not found")
    assert results[2]["data"]["metadata"]["stockSymbol"] == "F3"


def test_invalid_input_writes_degraded_report(tmp_path):
    input_file = write(tmp_path / "input.json", {"stock": {"symbol": "X"}})
    output_file = tmp_path / "report.json"

    exit_code = cli.main([input_file, "-o", str(output_file), "--mock"])

    report = json.loads(output_file.read_text(encoding="utf-8"))
    assert exit_code == 1
    assert report["error"] is True
    assert report["errors"]


def test_missing_input_file(tmp_path):
    assert cli.main([str(tmp_path / "nope.json"), "--mock"]) == 1


def test_missing_api_key_is_a_configuration_error(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "settings", Settings(google_api_key="", mock_mode=False))
    input_file = write(tmp_path / "input.json", make_input())

    exit_code = cli.main([input_file, "-o", str(tmp_path / "out.json")])

    assert exit_code == 1
    assert "GOOGLE_API_KEY" in capsys.readouterr().out


def test_unknown_log_level_is_a_usage_error(tmp_path, capsys):
    input_file = write(tmp_path / "input.json", make_input())

    with pytest.raises(SystemExit) as exc_info:
        cli.main([input_file, "--mock", "--log-level", "LOUD"])

    assert exc_info.value.code == 2
    assert "invalid choice" in capsys.readouterr().err
