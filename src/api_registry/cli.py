"""CLI entry point for api-registry."""

from pathlib import Path

import click

from api_registry.catalog import catalog, dump_json, dump_yaml
from api_registry.errors import RegistryError
from api_registry.loader import load_registry, read_config
from api_registry.log import configure_logging
from api_registry.registry import Registry


def _load(services: tuple[str, ...], config: Path | None) -> Registry:
    """Build the registry from --service options and the optional config file."""
    specs = list(services)
    if config is not None:
        specs = read_config(config) + specs
    if not specs:
        raise click.UsageError("No web service given. Use --service or --config.")
    return load_registry(specs)


def _service_options(f):
    f = click.option("-c", "--config", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML file listing web service definitions.")(f)
    f = click.option("-s", "--service", "services", multiple=True, help="Web service definition as 'module:attribute'. Repeatable.")(f)
    return f


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log definition events at debug level.")
def main(verbose: bool):
    """API Registry: inspect web service definitions."""
    configure_logging(verbose)


@main.command(name="list")
@_service_options
@click.option("--internal", is_flag=True, help="Include internal web services and actions.")
def list_services(services: tuple[str, ...], config: Path | None, internal: bool):
    """List controllers and their actions."""
    try:
        registry = _load(services, config)
    except RegistryError as e:
        raise click.ClickException(str(e)) from e

    for controller in registry.controllers():
        if controller.is_internal and not internal:
            continue
        click.echo(controller.path)
        for action in sorted(controller.actions, key=lambda a: a.key):
            if action.internal and not internal:
                continue
            method = "POST" if action.post else "GET"
            click.echo(f"  {method:<4} {action.path}")


@main.command()
@_service_options
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None, help="Output file. Prints to stdout when omitted.")
@click.option("--format", "fmt", default="yaml", type=click.Choice(["yaml", "json"]), help="Output format.")
@click.option("--internal", is_flag=True, help="Include internal web services, actions and parameters.")
def export(services: tuple[str, ...], config: Path | None, output: Path | None, fmt: str, internal: bool):
    """Export the web service catalog for documentation tooling."""
    try:
        registry = _load(services, config)
    except RegistryError as e:
        raise click.ClickException(str(e)) from e

    data = catalog(registry, include_internals=internal)
    text = dump_json(data) if fmt == "json" else dump_yaml(data)

    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Catalog of {len(data['web_services'])} web services saved to {output}")
