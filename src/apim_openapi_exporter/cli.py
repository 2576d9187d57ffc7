"""CLI entry point for apim-openapi-exporter."""

from pathlib import Path

import click
import uvicorn
import yaml

from apim_openapi_exporter.config import Settings, load_settings
from apim_openapi_exporter.errors import ExporterError
from apim_openapi_exporter.graph.loader import load_graph
from apim_openapi_exporter.openapi.document import build_document, serialize_document
from apim_openapi_exporter.openapi.traversal import CONFLICT_POLICIES


def _load_settings(config_path: Path | None) -> Settings:
    try:
        return load_settings(config_path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        raise click.ClickException(f"invalid config: {e}") from e


@click.group()
def main():
    """APIM OpenAPI Exporter: build OpenAPI documents from API route graphs."""
    pass


@main.command()
@click.argument("graph_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file for the OpenAPI JSON. Defaults to stdout.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "yaml", "json"]), help="Graph file format.")
@click.option("--on-conflict", default=None, type=click.Choice(CONFLICT_POLICIES), help="Duplicate path+method handling.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML settings file.")
def build(graph_path: Path, output: Path | None, fmt: str, on_conflict: str | None, config_path: Path | None):
    """Build an OpenAPI document from a route graph file."""
    settings = _load_settings(config_path)
    on_conflict = on_conflict or settings.on_conflict

    try:
        graph = load_graph(graph_path, fmt)
        document = build_document(graph, on_conflict=on_conflict)
        spec_json = serialize_document(document)
    except ExporterError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(spec_json)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(spec_json, encoding="utf-8")
    click.echo(f"Found {len(graph.segments)} segments, {len(graph.operations)} operations.")
    click.echo(f"OpenAPI document with {len(document.paths)} paths saved to {output}")


@main.command()
@click.option("--host", default=None, help="Bind address. Defaults to the configured host.")
@click.option("--port", default=None, type=int, help="Bind port. Defaults to the configured port.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML settings file.")
def serve(host: str | None, port: int | None, config_path: Path | None):
    """Run the HTTP service."""
    from apim_openapi_exporter.server import create_app

    settings = _load_settings(config_path)
    app = create_app(settings)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )
