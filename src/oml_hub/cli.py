# SPDX-License-Identifier: Apache-2.0
"""Command line interface for retrieving OpenML flows."""

# Standard
from typing import Optional
import sys

# Third Party
import click

# First Party
from oml_hub.core.config import load_config
from oml_hub.core.flow import display_flow, get_flow, get_flow_external_version
from oml_hub.core.store import ObjectStore
from oml_hub.core.utils.error_handling import OMLHubError
from oml_hub.core.utils.logger_config import setup_logger

logger = setup_logger(__name__)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a YAML config file (default: ~/.openml/config.yaml).",
)
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str]) -> None:
    """Retrieve and inspect OpenML flows."""
    ctx.obj = load_config(config_path)


@main.group()
def flow() -> None:
    """Flow commands."""


def _retrieve(ctx: click.Context, flow_id: int, cache_only: bool, verbosity):
    try:
        with ObjectStore(ctx.obj) as store:
            return get_flow(flow_id, cache_only=cache_only, verbosity=verbosity, store=store)
    except OMLHubError as e:
        logger.error(f"Failed to retrieve flow {flow_id}: {e.message}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@flow.command("get")
@click.argument("flow_id", type=click.IntRange(min=0))
@click.option("--cache-only", is_flag=True, help="Do not contact the server.")
@click.option(
    "--verbosity",
    type=click.IntRange(0, 2),
    default=None,
    help="0 = silent, 1 = normal, 2 = debug.",
)
@click.pass_context
def get_command(
    ctx: click.Context, flow_id: int, cache_only: bool, verbosity: Optional[int]
) -> None:
    """Download (or load from cache) FLOW_ID and print its component tree."""
    display_flow(_retrieve(ctx, flow_id, cache_only, verbosity))


@flow.command("version")
@click.argument("flow_id", type=click.IntRange(min=0))
@click.option("--cache-only", is_flag=True, help="Do not contact the server.")
@click.pass_context
def version_command(ctx: click.Context, flow_id: int, cache_only: bool) -> None:
    """Print the revision encoded in the external version of FLOW_ID."""
    flow_obj = _retrieve(ctx, flow_id, cache_only, 0)
    click.echo(get_flow_external_version(flow_obj))


@main.group()
def cache() -> None:
    """Cache commands."""


@cache.command("clear")
@click.option("--flow-id", type=click.IntRange(min=0), default=None)
@click.pass_context
def clear_command(ctx: click.Context, flow_id: Optional[int]) -> None:
    """Remove cached flows (all of them unless --flow-id is given)."""
    with ObjectStore(ctx.obj) as store:
        store.clear_cache("flow", flow_id)
    click.echo("Cache cleared")


if __name__ == "__main__":
    # pylint: disable=no-value-for-parameter
    main()
