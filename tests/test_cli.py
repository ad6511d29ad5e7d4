"""Tests for the envinject command group."""

import json
import os
import sys

import pytest
from click.testing import CliRunner

from envinject_cli.cli import cli, main

TEMPLATE = '{"ENV":"$ENV","BASE_URL":"$BASE_URL"}'


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("ENVINJECT_CONFIG", "ENVINJECT_TARGET", "ENVINJECT_ALLOW", "ENVINJECT_PREFIX", "BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ENV", "prod")
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    target = tmp_path / "dist" / "config.json"
    target.parent.mkdir()
    target.write_text(TEMPLATE, encoding="utf-8")
    return target


@pytest.fixture
def exec_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(os, "execvpe", lambda file, args, env: calls.append((file, args, env)))
    return calls


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "envinject" in result.output


def test_materialize_rewrites_target(runner, config_file):
    result = runner.invoke(cli, ["materialize", "--target", "dist/*.json", "--verbose"])

    assert result.exit_code == 0, result.output
    assert config_file.read_text(encoding="utf-8") == '{"ENV":"prod","BASE_URL":"$BASE_URL"}'
    assert "1 placeholder(s) substituted" in result.output
    assert "BASE_URL" in result.output
    # Values are never echoed
    assert "prod" not in result.output


def test_materialize_zero_matches_warns_but_succeeds(runner):
    result = runner.invoke(cli, ["materialize", "--target", "missing/*.js"])

    assert result.exit_code == 0
    assert "No files matched" in result.output


def test_materialize_bad_glob_fails(runner):
    result = runner.invoke(cli, ["materialize", "--target", "   "])

    assert result.exit_code == 1
    assert "Materialization failed" in result.output


def test_allow_list_limits_substitution(runner, config_file, monkeypatch):
    monkeypatch.setenv("BASE_URL", "/api")

    result = runner.invoke(cli, ["materialize", "-t", "dist/*.json", "--allow", "BASE_URL"])

    assert result.exit_code == 0, result.output
    assert config_file.read_text(encoding="utf-8") == '{"ENV":"$ENV","BASE_URL":"/api"}'


def test_target_from_config_file(runner, config_file, tmp_path):
    (tmp_path / "envinject.yml").write_text("materialize:\n  target: dist/*.json\n", encoding="utf-8")

    result = runner.invoke(cli, ["materialize"])

    assert result.exit_code == 0, result.output
    assert json.loads(config_file.read_text(encoding="utf-8"))["ENV"] == "prod"


def test_check_is_read_only_and_strict_fails_on_unresolved(runner, config_file):
    result = runner.invoke(cli, ["check", "-t", "dist/*.json"])
    strict = runner.invoke(cli, ["check", "-t", "dist/*.json", "--strict"])

    assert result.exit_code == 0
    assert "Unresolved: BASE_URL" in result.output
    assert strict.exit_code == 1
    assert config_file.read_text(encoding="utf-8") == TEMPLATE


def test_check_strict_passes_when_everything_resolves(runner, config_file, monkeypatch):
    monkeypatch.setenv("BASE_URL", "/api")

    result = runner.invoke(cli, ["check", "-t", "dist/*.json", "--strict"])

    assert result.exit_code == 0
    assert "All placeholders resolve" in result.output


def test_run_materializes_then_execs_server(runner, config_file, exec_calls):
    result = runner.invoke(cli, ["run", "-t", "dist/*.json", "--", sys.executable, "-m", "http.server"])

    assert result.exit_code == 0, result.output
    assert config_file.read_text(encoding="utf-8") == '{"ENV":"prod","BASE_URL":"$BASE_URL"}'
    assert len(exec_calls) == 1
    file, args, env = exec_calls[0]
    assert args == [sys.executable, "-m", "http.server"]
    assert env["ENV"] == "prod"


def test_run_uses_configured_server_without_command(runner, config_file, exec_calls, tmp_path):
    (tmp_path / "envinject.yml").write_text(
        f"materialize:\n  target: dist/*.json\n  server: [{json.dumps(sys.executable)}, -V]\n",
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["run", "--quiet"])

    assert result.exit_code == 0, result.output
    assert exec_calls[0][1] == [sys.executable, "-V"]


def test_run_does_not_start_server_when_materialization_fails(runner, config_file, exec_calls, monkeypatch):
    def crash(src, dst):
        raise OSError(13, "Permission denied")

    monkeypatch.setattr(os, "replace", crash)

    result = runner.invoke(cli, ["run", "-t", "dist/*.json", "--", sys.executable])

    assert result.exit_code == 1
    assert "not starting server" in result.output
    assert exec_calls == []
    assert config_file.read_text(encoding="utf-8") == TEMPLATE


def test_run_fails_when_server_missing(runner, config_file, exec_calls):
    result = runner.invoke(cli, ["run", "-t", "dist/*.json", "--", "no-such-server-binary"])

    assert result.exit_code == 1
    assert "not found" in result.output
    assert exec_calls == []


def test_templatize_command(runner, tmp_path):
    source = tmp_path / "config.json"
    source.write_text('{"ENV": "development", "BASE_URL": "/dev"}', encoding="utf-8")

    result = runner.invoke(cli, ["templatize", str(source)])

    assert result.exit_code == 0, result.output
    assert json.loads(source.read_text(encoding="utf-8")) == {"ENV": "$ENV", "BASE_URL": "$BASE_URL"}


def test_main_entry_point_runs_without_context_object(runner, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["envinject", "--version"])

    with pytest.raises(SystemExit) as excinfo:
        main()

    assert excinfo.value.code == 0
