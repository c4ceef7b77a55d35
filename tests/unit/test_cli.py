from __future__ import annotations

import logging
import time
from pathlib import Path

import pytest

from policygen.cli import USAGE, main, parse_args
from policygen.errors import UsageError


def test_missing_argument_is_usage_error(tmp_path: Path, capsys, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    exit_code = main([])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert USAGE in captured.err
    assert list(tmp_path.iterdir()) == []


def test_extra_arguments_are_usage_error(tmp_path: Path, capsys) -> None:
    first = tmp_path / "a.json"
    second = tmp_path / "b.json"

    exit_code = main([str(first), str(second)])

    assert exit_code == 1
    assert "expected exactly one output path, got 2" in capsys.readouterr().err
    assert not first.exists()
    assert not second.exists()


def test_unknown_option_is_usage_error(tmp_path: Path, capsys) -> None:
    out = tmp_path / "policy.json"

    assert main(["--bogus", str(out)]) == 1
    assert USAGE in capsys.readouterr().err
    assert not out.exists()


def test_parse_args_raises_usage_error() -> None:
    with pytest.raises(UsageError):
        parse_args([])


def test_parse_args_defaults() -> None:
    args = parse_args(["/tmp/policy.json"])
    assert args.output == "/tmp/policy.json"
    assert args.log_level == "WARN"


def test_export_writes_policy_and_reports_path(tmp_path: Path, capsys, read_json) -> None:
    out = tmp_path / "policy.json"
    before = int(time.time())

    exit_code = main([str(out)])

    after = int(time.time())
    assert exit_code == 0
    assert capsys.readouterr().out == f"Exporting policy path: {out}\n"

    payload = read_json(out)
    assert payload["id"] == "mojaloop-default"
    assert payload["mappings"][0]["image"]["value"] == "*"
    assert before <= payload["last_updated"] <= after

    policy_ids = {policy["id"] for policy in payload["policies"]}
    whitelist_ids = {whitelist["id"] for whitelist in payload["whitelists"]}
    assert policy_ids
    for mapping in payload["mappings"]:
        assert set(mapping["policy_ids"]) <= policy_ids
        assert set(mapping["whitelist_ids"]) <= whitelist_ids


def test_log_level_option_configures_logging(tmp_path: Path, monkeypatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    out = tmp_path / "policy.json"

    assert main(["--log-level", "DEBUG", str(out)]) == 0

    assert calls == [{"level": logging.DEBUG}]
    assert out.exists()


def test_default_log_level_is_warning(tmp_path: Path, monkeypatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    assert main([str(tmp_path / "policy.json")]) == 0

    assert calls == [{"level": logging.WARNING}]


def test_dash_prefixed_path_is_written(tmp_path: Path, monkeypatch, capsys, read_json) -> None:
    monkeypatch.chdir(tmp_path)

    exit_code = main(["-policy.json"])

    assert exit_code == 0
    assert capsys.readouterr().out == "Exporting policy path: -policy.json\n"
    assert read_json(tmp_path / "-policy.json")["id"] == "mojaloop-default"


def test_dash_prefixed_path_with_log_level(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert main(["--log-level", "ERROR", "--out.json"]) == 0
    assert (tmp_path / "--out.json").exists()


def test_option_prefix_is_not_abbreviated(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    args = parse_args(["--log"])

    assert args.output == "--log"
    assert args.log_level == "WARN"


def test_sole_help_flag_prints_help(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])

    assert excinfo.value.code == 0
    assert "usage: policygen" in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


def test_write_failure_propagates(tmp_path: Path, capsys) -> None:
    out = tmp_path / "missing" / "policy.json"

    with pytest.raises(OSError):
        main([str(out)])

    assert f"Exporting policy path: {out}" in capsys.readouterr().out
