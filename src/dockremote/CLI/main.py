"""
Command Line Interface for dockremote.
"""
import os
import sys

import click

from ..MANAGERS.environment_manager import EnvironmentManager
from ..MODELS.host_config import ContainerLink, DeviceMapping, VolumeBinding
from ..MODELS.image_name import ImageName
from ..MODELS.port import Port
from ..PARSERS.container_spec_parser import ContainerSpec, ContainerSpecError, ContainerSpecParser
from ..UTILS.logging_setup import configure_logging


def _parse_image(value):
    try:
        return ImageName.parse(value)
    except ValueError:
        return None


PARSERS = {
    'port': Port.parse,
    'volume': VolumeBinding.parse,
    'link': ContainerLink.parse,
    'image': _parse_image,
    'device': DeviceMapping.parse,
}


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    dockremote - container configuration models for the remote engine API.

    Checks container spec files and the short string forms used for
    ports, volume bindings, links, images and devices.
    """
    configure_logging(verbose=verbose)


@cli.command()
@click.argument('spec_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--env-file', '-e', 'env_files', multiple=True, help='.env file, relative to the spec file (repeatable)')
def check(spec_file, env_files):
    """Validate a container spec file and print a summary."""
    context = EnvironmentManager(base_dir=os.path.dirname(spec_file) or ".").get_merged_environment(
        env_files=env_files)
    try:
        spec = ContainerSpecParser(context).parse(spec_file)
    except ContainerSpecError as e:
        click.echo(f"Error: {e}")
        sys.exit(1)
    _print_summary(spec)


@cli.command()
@click.argument('kind', type=click.Choice(sorted(PARSERS)))
@click.argument('value')
def parse(kind, value):
    """Parse a port, volume, link, image or device string."""
    parsed = PARSERS[kind](value)
    if parsed is None:
        click.echo(f"Invalid {kind}: {value}")
        sys.exit(1)
    click.echo(f"{parsed!s} -> {parsed!r}")


def _print_summary(spec: ContainerSpec):
    config, host = spec.config, spec.host_config
    click.echo(f"{'IMAGE':15} {config.image}")
    if config.entry_point is not None:
        click.echo(f"{'ENTRYPOINT':15} {' '.join(config.entry_point)}")
    if config.command:
        click.echo(f"{'COMMAND':15} {' '.join(config.command)}")
    for key, value in sorted(config.environment_variables_map.items()):
        click.echo(f"{'ENV':15} {key}={value}")
    for port in config.exposed_ports:
        click.echo(f"{'EXPOSE':15} {port}")
    for port, bindings in host.port_bindings.items():
        targets = ', '.join(f"{b.host_ip}:{b.host_port}" for b in bindings) or '(random)'
        click.echo(f"{'PUBLISH':15} {port} -> {targets}")
    for binding in host.volume_bindings:
        click.echo(f"{'BIND':15} {binding}")
    for link in host.links:
        click.echo(f"{'LINK':15} {link}")
    click.echo(f"{'RESTART':15} {_describe_restart(host)}")


def _describe_restart(host) -> str:
    policy = host.restart_policy
    if not policy.name:
        return "never"
    retries = getattr(policy, 'maximum_retry_count', None)
    return f"{policy.name}:{retries}" if retries else policy.name


def main():
    """
    Main entry point for the CLI.
    """
    cli()


if __name__ == '__main__':
    main()
