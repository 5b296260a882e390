"""CLI smoke tests."""

from click.testing import CliRunner
from contract2markdown.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate" in result.output
    assert "generate-config" in result.output


def test_generate_help_lists_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["generate", "--help"])

    assert result.exit_code == 0
    options = ("--output", "--meta", "--config", "--schema-pages", "--parallelism", "--verbose")
    for option in options:
        assert option in result.output
