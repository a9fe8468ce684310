import click

from scrub.cli.check import check, lint
from scrub.version import PACKAGE_NAME, PACKAGE_VERSION


@click.group(invoke_without_command=True)
@click.version_option(PACKAGE_VERSION, prog_name=PACKAGE_NAME)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """scrub CLI"""
    # Show help when no subcommand is provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(check)
cli.add_command(lint)
