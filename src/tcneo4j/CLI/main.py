"""
Command Line Interface for tc-neo4j.
"""
import json
import logging

import click
import yaml

from ..BUILDERS.neo4j_builder import Neo4jBuilder
from ..CONVERTERS.to_compose import ComposeConverter
from ..MANAGERS.environment_manager import EnvironmentManager


@click.group()
@click.option('--version-tag', default=None, help='Neo4j image tag (default: $NEO4J_VERSION_TAG or 5)')
@click.option('--user', default=None, help='Database user (default: $NEO4J_TEST_USER or neo4j)')
@click.option('--password', default=None, help='Database password (default: $NEO4J_TEST_PASS or neo)')
@click.option('--plugin', '-p', 'plugins', multiple=True, help='Neo4j Labs plugin to bundle, e.g. apoc')
@click.option('--env-file', '-e', 'env_files', multiple=True, help='.env file with override variables')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, version_tag, user, password, plugins, env_files, verbose):
    """
    tc-neo4j - Neo4j test container configuration.

    Derives the environment and readiness markers of a Neo4j image.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    overrides = EnvironmentManager().get_overrides(list(env_files))
    builder = Neo4jBuilder.create(
        version=version_tag, user=user, password=password, lookup=overrides
    )
    ctx.ensure_object(dict)
    ctx.obj['image'] = builder.with_plugin(plugins).build()

@cli.command()
@click.option('--format', '-f', 'fmt', type=click.Choice(['dotenv', 'yaml', 'json']), default='dotenv')
@click.pass_context
def env(ctx, fmt):
    """Print the container environment."""
    env_vars = ctx.obj['image'].env_vars
    if fmt == 'yaml':
        click.echo(yaml.safe_dump(env_vars, default_flow_style=False, sort_keys=True), nl=False)
    elif fmt == 'json':
        click.echo(json.dumps(env_vars, indent=2, sort_keys=True))
    else:
        for key in sorted(env_vars):
            click.echo(f"{key}={env_vars[key]}")

@cli.command()
@click.pass_context
def describe(ctx):
    """Show image, ports and readiness markers"""
    image = ctx.obj['image']
    click.echo(f"{'IMAGE':15} {image.image}")
    click.echo(f"{'USER':15} {image.user}")
    click.echo(f"{'PLUGINS':15} {', '.join(image.plugins) or '-'}")
    click.echo(f"{'PORTS':15} {', '.join(str(p) for p in image.exposed_ports)}")
    click.echo("READY WHEN")
    for condition in image.ready_conditions:
        click.echo(f"  {condition.stream.value:13} {condition.message}")

@cli.command()
@click.option('--service', '-s', default='neo4j', help='Service name')
@click.option('--out', '-o', default=None, help='Output file (default: stdout)')
@click.pass_context
def compose(ctx, service, out):
    """Render a docker-compose service"""
    converter = ComposeConverter(ctx.obj['image'], service_name=service)
    if out:
        converter.convert(out)
        click.echo(f"Compose file written to {out}")
    else:
        click.echo(converter.render())

def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})

if __name__ == '__main__':
    main()
