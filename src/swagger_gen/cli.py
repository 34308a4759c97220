"""CLI entry point for swagger-gen."""

import logging
from pathlib import Path

import click

from swagger_gen.desc.base import ServiceDescriptor
from swagger_gen.desc.loader import load_services
from swagger_gen.errors import SwaggerGenError
from swagger_gen.generator.swagger import SwaggerGenerator, format_for
from swagger_gen.generator.validator import load_document, validate_document


def _load_all(targets: tuple[str, ...]) -> list[ServiceDescriptor]:
    services = []
    for target in targets:
        services.extend(load_services(target))
    return services


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def main(verbose: bool):
    """swagger-gen: build Swagger 2.0 documents from service descriptions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("targets", nargs=-1, required=True)
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the Swagger document.")
@click.option("--title", default="API", envvar="SWAGGER_GEN_TITLE", show_default=True, help="Document title.")
@click.option("--version", "api_version", default="v0.0.1", envvar="SWAGGER_GEN_VERSION", show_default=True, help="API version.")
@click.option("--description", default="", envvar="SWAGGER_GEN_DESCRIPTION", help="Document description.")
@click.option("--tag", "tag_name", default="json", envvar="SWAGGER_GEN_TAG", show_default=True, help="Field tag namespace supplying exposed field names.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Output format.")
@click.option("--fail-on-cycle", is_flag=True, help="Fail on self-referencing record types instead of emitting a $ref.")
def generate(
    targets: tuple[str, ...],
    output: Path,
    title: str,
    api_version: str,
    description: str,
    tag_name: str,
    fmt: str,
    fail_on_cycle: bool,
):
    """Generate a Swagger document from TARGETS (package.module:attribute)."""
    if fmt == "auto":
        fmt = format_for(output)

    try:
        services = _load_all(targets)
        click.echo(f"Loaded {len(services)} services.")

        gen = SwaggerGenerator(title, api_version, description, tag_name=tag_name, fail_on_cycle=fail_on_cycle)
        gen.write_to_file(output, *services, fmt=fmt)
    except SwaggerGenError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Swagger document saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
def check(doc_path: Path):
    """Check a Swagger document for dangling references and unmatched path parameters."""
    try:
        doc = load_document(doc_path)
    except SwaggerGenError as e:
        raise click.ClickException(str(e)) from e

    errors = validate_document(doc)
    if not errors:
        click.echo(f"{doc_path}: OK")
        return

    for location, message in errors.items():
        click.echo(f"{location}: {message}", err=True)
    raise click.ClickException(f"{len(errors)} issues found in {doc_path}")
