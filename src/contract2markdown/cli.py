"""Command line interface entry point."""

from __future__ import annotations

import sys

import click

from contract2markdown.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    SchemaPageLayout,
    apply_overrides,
    load_configuration,
    write_placeholder_configuration,
)
from contract2markdown.console_output import FileProgressDisplay, configure_logging
from contract2markdown.contract_loading import ContractError, ContractNotFoundError
from contract2markdown.run_execution import (
    GenerationRequest,
    GenerationRunError,
    execute_markdown_generation_run,
)

EXIT_GENERIC_ERROR = 1
EXIT_INPUT_NOT_FOUND = 2
EXIT_CONTRACT_LOAD_FAILED = 3
EXIT_GENERATION_FAILED = 4


class CliError(Exception):
    """Custom CLI error carrying the process exit code."""

    def __init__(self, message: str, exit_code: int = EXIT_GENERIC_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="contract2markdown")
def cli() -> None:
    """Convert OpenAPI / Swagger contracts into Markdown documentation."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generation configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML generation configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.argument("input_path", metavar="INPUT", type=click.Path(path_type=str))
@click.option(
    "-o",
    "--output",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Output folder for the generated Markdown files [default: ./output_md]",
)
@click.option(
    "-m",
    "--meta",
    "metadata_entries",
    multiple=True,
    metavar="KEY:VALUE",
    help="Front matter entry added to every page; may be repeated",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML/JSON generation configuration file",
)
@click.option(
    "--schema-pages",
    "schema_pages",
    required=False,
    type=click.Choice([layout.value for layout in SchemaPageLayout], case_sensitive=False),
    help="Also write standalone schema pages",
)
@click.option(
    "--parallelism",
    "parallelism",
    required=False,
    type=click.IntRange(min=1),
    help="Number of operation pages rendered concurrently",
)
@click.option(
    "-v", "--verbose", "verbosity", count=True, help="Increase log output (-vv for debug)"
)
def generate(
    input_path: str,
    output_dir: str | None,
    metadata_entries: tuple[str, ...],
    config_path: str | None,
    schema_pages: str | None,
    parallelism: int | None,
    verbosity: int,
) -> None:
    """Generate Markdown files from the contract at INPUT."""
    configure_logging(verbosity)
    try:
        configuration = apply_overrides(
            load_configuration(config_path),
            output_dir=output_dir,
            metadata_entries=metadata_entries,
            schema_pages=schema_pages,
            parallelism=parallelism,
        )
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc

    request = GenerationRequest(contract_path=input_path, configuration=configuration)
    try:
        with FileProgressDisplay() as progress:
            outcome = execute_markdown_generation_run(request, progress=progress)
    except ContractNotFoundError as exc:
        raise CliError(str(exc), EXIT_INPUT_NOT_FOUND) from exc
    except ContractError as exc:
        raise CliError(f"Failed to load contract: {exc}", EXIT_CONTRACT_LOAD_FAILED) from exc
    except GenerationRunError as exc:
        raise CliError(str(exc), EXIT_GENERATION_FAILED) from exc
    click.echo(f"Done. Wrote {outcome.written_count} files to {outcome.output_directory}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
