"""
Main CLI entry point for object-builder using Click.

Usage:
    object-builder assemble FILE [--set KEY=VALUE]... [--json]
    object-builder check FILE [--set KEY=VALUE]... [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import click
from pydantic import ValidationError

from objectbuilder import __version__
from objectbuilder.core import Builder, assemble
from objectbuilder.exceptions import BuilderError, MissingRequiredFieldError
from objectbuilder.models import Package
from objectbuilder.parsers import PackageParser, apply_overrides


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)

override_option = click.option(
    "--set",
    "-s",
    "overrides",
    multiple=True,
    metavar="KEY=VALUE",
    help="Override a field before assembling (dotted keys reach nested fields, "
    "e.g. details.license=MIT). Can be specified multiple times",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version=__version__, prog_name="object-builder")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Build validated package descriptors from partial JSON input."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command("assemble")
@click.argument("file", type=click.Path(exists=True))
@override_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def assemble_command(
    config: Config,
    file: str,
    overrides: tuple[str, ...],
    as_json: bool,
) -> None:
    """Assemble a package descriptor.

    Reads a package.json or npm registry document, applies overrides and
    assembles it into a validated package descriptor.

    Example:
        object-builder assemble package.json --set details.license=MIT
    """
    logger = logging.getLogger("assemble")

    builder = _load_builder(file, overrides)

    logger.info("Assembling package...")
    try:
        pkg = assemble(builder)
    except (BuilderError, ValidationError) as e:
        raise click.ClickException(f"Assembly failed: {e}")

    if as_json:
        click.echo(pkg.model_dump_json(by_alias=True, indent=2))
    else:
        _print_package_summary(pkg)


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@override_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def check(
    config: Config,
    file: str,
    overrides: tuple[str, ...],
    as_json: bool,
) -> None:
    """Check that a package document assembles.

    Reports the first missing required field, if any.

    Example:
        object-builder check registry.json
    """
    logger = logging.getLogger("check")

    builder = _load_builder(file, overrides)

    logger.info("Checking package...")
    error: Optional[Exception] = None
    missing_field: Optional[str] = None
    try:
        assemble(builder)
    except MissingRequiredFieldError as e:
        error = e
        missing_field = e.field_name
    except (BuilderError, ValidationError) as e:
        error = e

    if as_json:
        output = {
            "is_valid": error is None,
            "missing_field": missing_field,
            "error": str(error) if error else None,
        }
        click.echo(json.dumps(output, indent=2))
    else:
        status = (
            click.style("PASSED", fg="green")
            if error is None
            else click.style("FAILED", fg="red")
        )
        click.echo(f"Check: {status}")
        if error is not None:
            click.echo(f"  ✗ {error}")

    if error is not None:
        sys.exit(1)


def _load_builder(file: str, overrides: tuple[str, ...]) -> Builder[Package]:
    """Parse a package document and apply overrides."""
    logger = logging.getLogger("load")

    logger.info(f"Parsing package document: {file}")
    parser = PackageParser()
    try:
        builder = parser.parse(file)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Error parsing package document: {e}")

    try:
        apply_overrides(builder, overrides)
    except ValueError as e:
        raise click.ClickException(str(e))

    return builder


def _print_package_summary(pkg: Package) -> None:
    """Print a summary of an assembled package."""
    click.echo(f"Package: {pkg.package_specifier}")
    if pkg.did_fail():
        click.echo(click.style(f"  Error: {pkg.error}", fg="red"))
        return

    details = pkg.details
    click.echo(f"  License: {details.license or 'Unknown'}")
    click.echo(f"  Homepage: {details.homepage or 'Unknown'}")
    click.echo(f"  Repository: {details.repository_url or 'Unknown'}")
    if details.publish_date:
        click.echo(f"  Published: {details.publish_date.isoformat()}")
    if details.publish_author:
        click.echo(f"  Publisher: {details.publish_author}")
    if details.is_version_data_missing:
        click.echo(click.style("  Version data missing from registry", fg="yellow"))


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
