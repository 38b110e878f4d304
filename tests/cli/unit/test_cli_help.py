"""CLI smoke tests."""

from click.testing import CliRunner
from schema_tables.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "flatten" in result.output
    assert "sample" in result.output
    assert "--verbose" in result.output
