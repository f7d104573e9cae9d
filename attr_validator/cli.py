"""CLI entry point: attr-validate.

Subcommands:
    attr-validate run src/ --manifest types.json    # Validate against a manifest
    attr-validate run src/ --php-bootstrap vendor/autoload.php
    attr-validate scan src/                         # Declaration records only
    attr-validate tokens src/Foo.php                # Token dump for one file
    attr-validate create-manifest -o types.json     # Registry manifest template
"""

from __future__ import annotations

import dataclasses
import json
import sys
from pathlib import Path

import click

from attr_validator.analyzer import AttributeAnalyzer
from attr_validator.config import PARSE_ERROR_POLICIES, AnalyzerSettings, load_settings
from attr_validator.diagnostics import debug_file
from attr_validator.discovery import discover_sources
from attr_validator.exceptions import AttrValidatorError
from attr_validator.log import setup_logging
from attr_validator.registry import PhpReflectionRegistry, StaticTypeRegistry, TypeRegistry
from attr_validator.registry.manifest import MANIFEST_TEMPLATE
from attr_validator.scanner import DeclarationScanner
from attr_validator.schemas import DeclarationRecordSchema

# Exit codes
EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2

_STATUS_ICONS = {
    "completed": "+",
    "failed": "!",
    "running": "~",
    "pending": ".",
}


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(EXIT_ERROR)


def _settings(**overrides) -> AnalyzerSettings:
    """Environment settings with non-empty CLI overrides applied."""
    settings = load_settings()
    changes = {k: v for k, v in overrides.items() if v}
    return dataclasses.replace(settings, **changes) if changes else settings


def _build_registry(manifest: str | None, settings: AnalyzerSettings) -> TypeRegistry:
    if manifest:
        return StaticTypeRegistry.from_manifest(manifest)
    return PhpReflectionRegistry(
        bootstrap=settings.php_bootstrap,
        php_binary=settings.php_binary,
        timeout=settings.php_timeout,
    )


def _write(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text + "\n")
        click.echo(f"Report written to {output}", err=True)
    else:
        click.echo(text)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """attr-validate: find PHP attributes whose defining class does not load."""
    setup_logging(level="DEBUG" if verbose else None)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command("run")
@click.argument("path", type=click.Path())
@click.option(
    "--manifest",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON registry manifest (instead of PHP reflection)",
)
@click.option("--php-bootstrap", default=None, help="PHP file to require first, e.g. vendor/autoload.php")
@click.option("--php-binary", default=None, help="PHP interpreter (default: php)")
@click.option("--full", is_flag=True, help="Print every category, not only the problems")
@click.option("--exclude", multiple=True, help="Directory name to skip (repeatable)")
@click.option(
    "--on-parse-error",
    type=click.Choice(PARSE_ERROR_POLICIES),
    default=None,
    help="abort the run, or report the file as suspect",
)
@click.option("-o", "--output", default=None, help="Write the JSON report to a file")
@click.pass_context
def run(
    ctx: click.Context,
    path: str,
    manifest: str | None,
    php_bootstrap: str | None,
    php_binary: str | None,
    full: bool,
    exclude: tuple[str, ...],
    on_parse_error: str | None,
    output: str | None,
) -> None:
    """Validate the attributes of every class under PATH."""
    if manifest and php_bootstrap:
        _fail("--manifest and --php-bootstrap are mutually exclusive")

    try:
        settings = _settings(
            on_parse_error=on_parse_error,
            exclude_dirs=exclude,
            php_binary=php_binary,
            php_bootstrap=php_bootstrap,
        )
        registry = _build_registry(manifest, settings)
    except AttrValidatorError as e:
        _fail(str(e))

    analyzer = AttributeAnalyzer(registry, settings)
    try:
        report = analyzer.analyze(path)
    except AttrValidatorError as e:
        _fail(str(e))
    finally:
        registry.close()

    _write(report.to_json(full=full), output)

    if ctx.obj.get("verbose"):
        summary = analyzer.progress.get_summary()
        click.echo(f"\nPipeline summary (total: {summary['total_duration']}s):", err=True)
        for p in summary["phases"]:
            status_icon = _STATUS_ICONS.get(p["status"], "?")
            duration = f" ({p['duration']}s)" if p["duration"] else ""
            detail = f" - {p['detail']}" if p["detail"] else ""
            click.echo(f"  [{status_icon}] {p['phase']}{duration}{detail}", err=True)

    sys.exit(EXIT_OK if report.is_valid else EXIT_FINDINGS)


@main.command("scan")
@click.argument("path", type=click.Path())
@click.option("--exclude", multiple=True, help="Directory name to skip (repeatable)")
def scan(path: str, exclude: tuple[str, ...]) -> None:
    """Print the declaration record of every file under PATH."""
    scanner = DeclarationScanner()
    try:
        settings = _settings(exclude_dirs=exclude)
        records = [scanner.scan_file(p) for p in discover_sources(path, settings.exclude_dirs)]
    except AttrValidatorError as e:
        _fail(str(e))

    data = [DeclarationRecordSchema.from_record(r).model_dump(by_alias=True) for r in records]
    click.echo(json.dumps(data, indent=2))


@main.command("tokens")
@click.argument("file", type=click.Path())
@click.option("--json", "as_json", is_flag=True, help="Print tokens as JSON")
def tokens(file: str, as_json: bool) -> None:
    """Dump the significant tokens of one PHP file."""
    try:
        dump = debug_file(file)
    except AttrValidatorError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps(dump, indent=2))
        return
    for token in dump:
        click.echo(f"  {token['name']:28s} {token['text']}")


@main.command("create-manifest")
@click.option("-o", "--output", default="types.json", help="Output file path")
def create_manifest(output: str) -> None:
    """Generate a registry manifest template JSON file."""
    Path(output).write_text(json.dumps(MANIFEST_TEMPLATE, indent=2) + "\n")
    click.echo(f"Manifest template written to {output}")
    click.echo("Edit the file, then run: attr-validate run <path> --manifest " + output)


if __name__ == "__main__":
    main()
