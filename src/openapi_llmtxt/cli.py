"""CLI entry point for openapi-llmtxt."""

import json
import logging
from pathlib import Path

import click

from openapi_llmtxt.errors import LlmTxtError
from openapi_llmtxt.generator.example import UNDEFINED, ExampleSynthesizer
from openapi_llmtxt.generator.llmtxt import LlmTxtGenerator
from openapi_llmtxt.generator.remote import RemoteConverter
from openapi_llmtxt.parser.detect import detect_format
from openapi_llmtxt.parser.refs import RefResolver
from openapi_llmtxt.parser.swagger import load_document_file

SCHEMA_REF_PREFIXES = ("#/components/schemas/", "#/definitions/")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group()
def main():
    """OpenAPI to llm.txt: turn OpenAPI/Swagger specs into LLM-friendly Markdown."""
    pass


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the llm.txt Markdown here instead of stdout.")
@click.option("--remote", is_flag=True, help="Let the LLM write the document instead of the local converter.")
@click.option("--model", default=None, envvar="LLMTXT_MODEL", help="LLM model to use with --remote.")
@click.option("--base-url", default=None, envvar="LLMTXT_BASE_URL", help="Base URL for cURL examples (defaults to servers[0].url).")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def convert(spec_path: Path, output: Path | None, remote: bool, model: str | None, base_url: str | None, verbose: bool):
    """Convert an OpenAPI/Swagger document to llm.txt Markdown."""
    _configure_logging(verbose)

    try:
        if remote:
            if detect_format(spec_path) == "yaml":
                raise click.UsageError("--remote expects a JSON document.")
            result = RemoteConverter(model=model).convert(spec_path.read_text(encoding="utf-8"))
        else:
            doc = load_document_file(spec_path)
            result = LlmTxtGenerator(doc, base_url=base_url).generate()
    except LlmTxtError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(result)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result, encoding="utf-8")
    click.echo(f"llm.txt saved to {output}", err=True)


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("schema_name")
@click.option("--required-only", is_flag=True, help="Only include required properties.")
def example(spec_path: Path, schema_name: str, required_only: bool):
    """Print a synthesized JSON example for a named component schema."""
    try:
        doc = load_document_file(spec_path)
    except LlmTxtError as e:
        raise click.ClickException(str(e)) from e

    resolver = RefResolver(doc)
    ref = next((p + schema_name for p in SCHEMA_REF_PREFIXES if resolver.resolve(p + schema_name) is not None), None)
    if ref is None:
        raise click.ClickException(f"Schema {schema_name!r} not found in {spec_path}")

    value = ExampleSynthesizer(doc, resolver).synthesize({"$ref": ref}, required_only=required_only)
    click.echo(json.dumps(None if value is UNDEFINED else value, indent=2, ensure_ascii=False, default=str))
