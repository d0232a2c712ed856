"""Tests for the sportevents CLI."""

import re

import pytest
from click.testing import CliRunner

from sportevents.cli import cli

UUID_PATTERN = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def db_args(tmp_path) -> list[str]:
    return ["--db-path", str(tmp_path / "cli.db")]


def test_help(runner: CliRunner):
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "serve" in result.output
    assert "event" in result.output


def test_init(runner: CliRunner, db_args, tmp_path):
    result = runner.invoke(cli, [*db_args, "init"])

    assert result.exit_code == 0, result.output
    assert "Database initialized" in result.output
    assert (tmp_path / "cli.db").exists()


def test_create_list_and_show(runner: CliRunner, db_args):
    created = runner.invoke(cli, [*db_args, "event", "create", "football", "2030-05-01T18:00:00"])
    assert created.exit_code == 0, created.output
    event_id = UUID_PATTERN.search(created.output).group(0)

    listed = runner.invoke(cli, [*db_args, "event", "list", "--sport", "FOOTBALL"])
    assert listed.exit_code == 0, listed.output
    assert "INACTIVE" in listed.output

    shown = runner.invoke(cli, [*db_args, "event", "show", event_id])
    assert shown.exit_code == 0, shown.output
    assert event_id in shown.output
    assert "FOOTBALL" in shown.output
    assert "Next:    ACTIVE" in shown.output


def test_create_with_status_and_filter(runner: CliRunner, db_args):
    runner.invoke(cli, [*db_args, "event", "create", "TENNIS", "2030-05-01 18:00", "-s", "ACTIVE"])

    active = runner.invoke(cli, [*db_args, "event", "list", "--status", "ACTIVE"])
    finished = runner.invoke(cli, [*db_args, "event", "list", "--status", "FINISHED"])

    assert "TENNIS" in active.output
    assert "No events found" in finished.output


def test_show_missing_event(runner: CliRunner, db_args):
    result = runner.invoke(
        cli, [*db_args, "event", "show", "00000000-0000-0000-0000-000000000000"]
    )

    assert result.exit_code == 1
    assert "not found" in result.output


def test_create_rejects_unknown_sport(runner: CliRunner, db_args):
    result = runner.invoke(cli, [*db_args, "event", "create", "CHESS", "2030-05-01T18:00:00"])

    assert result.exit_code != 0
