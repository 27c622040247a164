# SPDX-License-Identifier: Apache-2.0
"""Rich rendering of flow trees."""

# Standard
from typing import Optional

# Third Party
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

# Local
from .metadata import Flow


def _parameter_table(flow: Flow) -> Table:
    table = Table(show_header=True, header_style="bold bright_magenta")
    table.add_column("Parameter", style="bold bright_cyan", no_wrap=True)
    table.add_column("Type", style="yellow")
    table.add_column("Default", style="bright_green")
    table.add_column("Description", style="white")

    for parameter in flow.parameters:
        table.add_row(
            escape(parameter.name),
            escape(parameter.data_type or "-"),
            escape(parameter.default_value or "-"),
            escape(parameter.description or ""),
        )
    return table


def build_flow_tree(flow: Flow, label: Optional[str] = None) -> Tree:
    """Build a rich tree for ``flow`` and its components.

    Parameters
    ----------
    flow : Flow
        Flow to render.
    label : Optional[str]
        Component identifier shown before the flow name.
    """
    title = (
        f"[bold bright_magenta]{escape(flow.name)}[/] "
        f"v{escape(flow.version)} (id: {flow.flow_id})"
    )
    if label:
        title = f"[yellow]{escape(label)}[/]: {title}"
    tree = Tree(title)

    details = [f"[dim]{escape(flow.description)}[/]"] if flow.description else []
    if flow.external_version:
        details.append(f"External version: {escape(flow.external_version)}")
    if flow.tags:
        details.append(f"Tags: {escape(', '.join(flow.tags))}")
    artifact = flow.binary_path or flow.source_path
    if artifact:
        details.append(f"Artifact: {escape(artifact)}")
    for line in details:
        tree.add(line)

    if flow.parameters:
        tree.add(_parameter_table(flow))

    for identifier, component in flow.components.items():
        tree.add(build_flow_tree(component, label=identifier))

    return tree


def display_flow(flow: Flow, console: Optional[Console] = None) -> None:
    """Print a flow and its component tree."""
    console = console or Console()
    console.print(build_flow_tree(flow))
