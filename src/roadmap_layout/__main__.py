"""CLI entry point for roadmap-layout."""

import logging
import sys

import click

from roadmap_layout.config import CYCLE_POLICIES, LayoutConfig
from roadmap_layout.errors import LayoutError
from roadmap_layout.layout.engine import RoadmapLayout
from roadmap_layout.parsers import parse
from roadmap_layout.renderers.reactflow import ReactFlowRenderer

logger = logging.getLogger("roadmap_layout")


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--padding", "-p", "padding", type=float, default=30, help="Minimum spacing between node boxes")
@click.option("--passes", "passes", type=int, default=5, help="Maximum collision-repair passes")
@click.option(
    "--on-cycle",
    "on_cycle",
    type=click.Choice(CYCLE_POLICIES),
    default="raise",
    help="Fail on a cyclic spine, or break the cycle and continue",
)
@click.option("--compact", is_flag=True, help="Emit compact JSON instead of indented")
@click.option("--strict", is_flag=True, help="Exit with status 2 when the layout has diagnostics")
@click.option("--verbose", "-v", count=True, help="Log stage details to stderr (-vv for debug)")
def main(
    input: str | None,
    output: str | None,
    padding: float,
    passes: int,
    on_cycle: str,
    compact: bool,
    strict: bool,
    verbose: int,
) -> None:
    """Lay out a generated roadmap (JSON nodes/edges) as a spine with branches."""
    level = logging.ERROR if verbose == 0 else logging.INFO if verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        config = LayoutConfig(padding=padding, max_passes=passes, on_cycle=on_cycle)
        nodes, edges = parse(text)
        result = RoadmapLayout(config).run(nodes, edges)
    except LayoutError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    for diagnostic in result.diagnostics:
        logger.info("%s: %s", type(diagnostic).__name__, diagnostic)

    rendered = ReactFlowRenderer(indent=None if compact else 2).render(result)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)

    if strict and result.diagnostics:
        click.echo(f"error: layout produced {len(result.diagnostics)} diagnostic(s)", err=True)
        sys.exit(2)


if __name__ == "__main__":
    main()
