"""CLI entry point for monorelease."""

from __future__ import annotations

import click

from monorelease.pipeline import resolve_mode, resolve_options, run


@click.group(invoke_without_command=True)
@click.version_option()
@click.option("--monorepo", is_flag=True, help="Release a package from packages/.")
@click.option(
    "--package",
    "packages",
    multiple=True,
    metavar="NAME",
    help="Package name to offer outside monorepo mode (repeatable).",
)
@click.option("--dry", is_flag=True, help="Print commands instead of running them.")
@click.pass_context
def cli(
    ctx: click.Context, monorepo: bool, packages: tuple[str, ...], dry: bool
) -> None:
    """Bump, tag and push a package release; publish it from CI."""
    if ctx.invoked_subcommand is not None:
        return
    config = resolve_options(monorepo=monorepo, dry=dry, packages=packages)
    run(resolve_mode(config), config)


@cli.command()
@click.argument("tag")
@click.option("--monorepo", is_flag=True, help="Look the package up in packages/.")
@click.option("--dry", is_flag=True, help="Print commands instead of running them.")
@click.option("--registry", default=None, help="Registry URL to publish to.")
def publish(tag: str, monorepo: bool, dry: bool, registry: str | None) -> None:
    """Publish the package released as TAG (<name>@<version>), usually from CI."""
    config = resolve_options(monorepo=monorepo, dry=dry, registry=registry)
    run(resolve_mode(config, publish=True), config, tag=tag)
