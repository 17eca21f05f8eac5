"""
Command-line interface for polycsg.

Provides commands for running boolean operations on generated solids and
inspecting tolerance profiles.
"""

import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from polycsg import __version__
from polycsg.core.config import ConfigManager, ToleranceConfig
from polycsg.core.logging import configure_logging, operation_context
from polycsg.csg.solid import BooleanOperation
from polycsg.geometry.operations import analyze_result, boolean_operation
from polycsg.geometry.primitives import Cube

console = Console()


def _fmt_vec(values: list[float]) -> str:
    return "(" + ", ".join(f"{v:.4g}" for v in values) + ")"


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config-dir",
    type=click.Path(path_type=Path),
    default="config",
    help="Configuration directory",
)
@click.option("--log-level", default="WARNING", help="Log level (DEBUG, INFO, ...)")
@click.option(
    "--log-json/--log-console",
    default=None,
    help="Log line format; defaults to console on a terminal and JSON otherwise",
)
@click.pass_context
def main(
    ctx: click.Context, config_dir: Path, log_level: str, log_json: Optional[bool]
) -> None:
    """polycsg - Boolean operations on polygon solids."""
    configure_logging(level=log_level, json_output=log_json)
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir


def _resolve_tolerance(config_dir: Path, profile: Optional[str]) -> ToleranceConfig:
    if profile is None:
        return ToleranceConfig()
    return ConfigManager(config_dir).get_profile(profile)


# =============================================================================
# Boolean Commands
# =============================================================================


@main.command("cubes")
@click.argument(
    "operation",
    type=click.Choice([op.value for op in BooleanOperation]),
)
@click.option("--size", "-s", type=float, default=1.0, help="Edge length of both cubes")
@click.option(
    "--offset",
    "-o",
    type=float,
    nargs=3,
    default=(0.5, 0.0, 0.0),
    help="Centre of the second cube (the first sits at the origin)",
)
@click.option("--profile", "-p", default=None, help="Tolerance profile name")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def cubes(
    ctx: click.Context,
    operation: str,
    size: float,
    offset: tuple[float, float, float],
    profile: Optional[str],
    as_json: bool,
) -> None:
    """Combine a cube at the origin with a second, offset cube."""
    try:
        tolerance = _resolve_tolerance(ctx.obj["config_dir"], profile)
        a = Cube.at((0.0, 0.0, 0.0), size).to_solid()
        b = Cube.at(offset, size).to_solid()

        with operation_context(operation=operation, profile=tolerance.name):
            result = boolean_operation(
                a,
                b,
                operation,
                epsilon=tolerance.epsilon,
                bbox_tolerance=tolerance.effective_bbox_tolerance,
            )
        report = analyze_result(result, tolerance.epsilon)
    except Exception as e:
        console.print(f"[red]✗[/red] Boolean {operation} failed: {e}")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(report, indent=2))
        return

    summary = Table(title=f"{operation} of two cubes")
    summary.add_column("Property", style="cyan")
    summary.add_column("Value")
    summary.add_row("Pieces", str(report["piece_count"]))
    summary.add_row("Empty", "yes" if report["is_empty"] else "no")
    summary.add_row("Total volume", f"{report['total_volume']:.6g}")
    summary.add_row("Total surface area", f"{report['total_surface_area']:.6g}")
    summary.add_row("Edges", str(report["edge_count"]))
    console.print(summary)

    if report["pieces"]:
        pieces = Table(title="Pieces")
        pieces.add_column("#")
        pieces.add_column("Vertices")
        pieces.add_column("Faces")
        pieces.add_column("Volume")
        pieces.add_column("Area")
        pieces.add_column("Convex")
        pieces.add_column("Bounds")

        for index, piece in enumerate(report["pieces"]):
            pieces.add_row(
                str(index),
                str(piece["vertex_count"]),
                str(piece["face_count"]),
                f"{piece['volume']:.6g}",
                f"{piece['surface_area']:.6g}",
                "✓" if piece["is_convex"] else "-",
                f"{_fmt_vec(piece['bounds_min'])} - {_fmt_vec(piece['bounds_max'])}",
            )

        console.print(pieces)


# =============================================================================
# Configuration Commands
# =============================================================================


@main.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command("list-profiles")
@click.pass_context
def config_list_profiles(ctx: click.Context) -> None:
    """List available tolerance profiles."""
    try:
        config_mgr = ConfigManager(ctx.obj["config_dir"])
        profiles = config_mgr.list_profiles()

        if not profiles:
            console.print("[yellow]No tolerance profiles found.[/yellow]")
            return

        table = Table(title="Tolerance Profiles")
        table.add_column("Name", style="cyan")
        table.add_column("Epsilon")
        table.add_column("BBox tolerance")
        table.add_column("Description")

        for name in profiles:
            tolerance = config_mgr.get_profile(name)
            table.add_row(
                name,
                f"{tolerance.epsilon:g}",
                f"{tolerance.effective_bbox_tolerance:g}",
                tolerance.description or "-",
            )

        console.print(table)

    except Exception as e:
        console.print(f"[red]✗[/red] Failed to list profiles: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
