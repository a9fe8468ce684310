import json

import pytest
from click.testing import CliRunner

from scrub.cli import cli

SPEC = """
name:
  type: string
  required: true
limit:
  type: number
  default: 10
verbose:
  type: boolean
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "spec.yml"
    path.write_text(SPEC)
    return path


@pytest.fixture
def value_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"name": "widgets", "limit": "5"}))
    return path


def test_no_command_shows_help(runner):
    result = runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "check" in result.output
    assert "lint" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "scrub" in result.output


def test_check_params(runner, spec_file):
    result = runner.invoke(
        cli, ["check", str(spec_file), "-p", "name=widgets", "-p", "limit=25", "-p", "verbose=yes"]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"name": "widgets", "limit": 25, "verbose": True}


def test_check_value_file(runner, spec_file, value_file):
    result = runner.invoke(cli, ["check", str(spec_file), str(value_file), "--json-output"])
    assert result.exit_code == 0, result.output
    output = json.loads(result.output)
    assert output["status"] == "ok"
    assert output["result"] == {"name": "widgets", "limit": 5}


def test_params_override_value_file(runner, spec_file, value_file):
    result = runner.invoke(cli, ["check", str(spec_file), str(value_file), "-p", "limit=7"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["limit"] == 7


def test_check_no_coerce(runner, spec_file):
    result = runner.invoke(
        cli, ["check", str(spec_file), "-p", "name=x", "-p", "limit=2", "--no-coerce"]
    )
    assert result.exit_code == 1
    assert "Invalid Type: string" in result.output


def test_check_failure(runner, spec_file):
    result = runner.invoke(cli, ["check", str(spec_file), "-p", "limit=3"])
    assert result.exit_code == 1
    assert "Error: Missing Required Parameter: name" in result.output
    assert "At: name" in result.output


def test_check_failure_json(runner, spec_file):
    result = runner.invoke(
        cli,
        ["check", str(spec_file), "-p", "extra=1", "-p", "name=x", "--strict", "--json-output"],
    )
    assert result.exit_code == 1
    output = json.loads(result.output)
    assert output["status"] == "error"
    assert output["code"] == "badParam"
    assert output["key"] == "extra"
    assert output["path"] == ["extra"]


def test_strict_from_env(runner, spec_file):
    result = runner.invoke(
        cli, ["check", str(spec_file), "-p", "name=x", "-p", "extra=1"], env={"SCRUB_STRICT": "1"}
    )
    assert result.exit_code == 1
    assert "Unrecognized Parameter: extra" in result.output


def test_ignore_required(runner, spec_file):
    result = runner.invoke(cli, ["check", str(spec_file), "--ignore-required", "--ignore-defaults"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {}


def test_params_need_object_value(runner, spec_file, tmp_path):
    value_file = tmp_path / "list.yml"
    value_file.write_text("- 1\n")
    result = runner.invoke(cli, ["check", str(spec_file), str(value_file), "-p", "name=x"])
    assert result.exit_code == 1
    assert "--param can only be combined with an object value" in result.output


def test_malformed_param(runner, spec_file):
    result = runner.invoke(cli, ["check", str(spec_file), "-p", "name"])
    assert result.exit_code == 2
    assert "Expected name=value" in result.output


def test_missing_spec_file(runner, tmp_path):
    result = runner.invoke(cli, ["check", str(tmp_path / "nope.yml")])
    assert result.exit_code == 1
    assert "Spec file not found" in result.output


def test_lint_ok(runner, spec_file):
    result = runner.invoke(cli, ["lint", str(spec_file)])
    assert result.exit_code == 0, result.output
    assert result.output.strip().endswith(": ok")


def test_lint_failure(runner, tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("name:\n  type: string\n  required: 5\n")
    result = runner.invoke(cli, ["lint", str(path), "--json-output"])
    assert result.exit_code == 1
    output = json.loads(result.output)
    assert output["status"] == "error"
    assert "name.required" in output["error"]
