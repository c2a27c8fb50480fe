# src/quickprop/cli.py
"""Command-line interface for quickprop.

Runs a property found at ``module:attribute``. The attribute may be a
Property or a function with annotated parameters.

Usage:
    # Run a property with defaults (100 tests, discard ratio 10, max size 100)
    quickprop check mypkg.props:prop_reverse

    # More trials, JSON logs
    quickprop --json-logs check mypkg.props:prop_reverse --tests 1000

    # Reproduce a reported failure (seed and size come from the report)
    quickprop replay mypkg.props:prop_reverse --seed 1234 --size 37
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

from quickprop import __version__
from quickprop.contracts import PropertyLoadError, RunStatus, TestStatus
from quickprop.core.config import CheckSettings
from quickprop.core.logging import configure_logging
from quickprop.engine.property import Property, as_property
from quickprop.engine.runner import Runner

app = typer.Typer(
    name="quickprop",
    help="quickprop: Property-based testing with lazy shrink trees.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"quickprop version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging (shows every shrink step).",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """quickprop: Property-based testing with lazy shrink trees."""
    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "WARNING")


def load_target(target: str, app_dir: Path | None = None) -> Property:
    """Resolve ``module:attribute`` to a Property.

    Args:
        target: Import path, e.g. ``mypkg.props:prop_reverse``.
        app_dir: Directory to put at the front of sys.path before importing.

    Raises:
        PropertyLoadError: If the target cannot be imported or is not testable.
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise PropertyLoadError(f"Target must look like 'module:attribute', got {target!r}")

    if app_dir is not None and str(app_dir) not in sys.path:
        sys.path.insert(0, str(app_dir))

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise PropertyLoadError(f"Cannot import module {module_name!r}: {e}") from e

    obj: Any = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise PropertyLoadError(f"Module {module_name!r} has no attribute {attribute!r}") from e

    try:
        return as_property(obj)
    except TypeError as e:
        raise PropertyLoadError(f"{target} is not a property: {e}") from e


def _load_or_exit(target: str, app_dir: Path | None) -> Property:
    try:
        return load_target(target, app_dir)
    except PropertyLoadError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2) from e


AppDirOption = Annotated[
    Path | None,
    typer.Option(
        "--app-dir",
        help="Directory added to the import path before loading the target.",
        file_okay=False,
        dir_okay=True,
    ),
]


@app.command()
def check(
    target: Annotated[str, typer.Argument(help="Property to run, as module:attribute.")],
    tests: Annotated[
        int | None,
        typer.Option("--tests", "-n", help="Passing trials required.", min=1),
    ] = None,
    max_discard_ratio: Annotated[
        int | None,
        typer.Option("--max-discard-ratio", help="Attempts allowed per required passing trial.", min=1),
    ] = None,
    max_size: Annotated[
        int | None,
        typer.Option("--max-size", help="Upper bound of the size schedule.", min=0),
    ] = None,
    app_dir: AppDirOption = Path("."),
) -> None:
    """Run a property until it passes, fails, or gives up.

    Exits 0 when the run succeeds and 1 otherwise.
    """
    prop = _load_or_exit(target, app_dir)
    settings = CheckSettings().with_overrides(
        tests=tests,
        max_discard_ratio=max_discard_ratio,
        max_size=max_size,
    )
    result = Runner(settings).run(prop)

    if result.status is RunStatus.SUCCEEDED:
        typer.secho(f"+++ {result.describe()}", fg=typer.colors.GREEN)
        return

    typer.secho(f"*** {result.describe()}", fg=typer.colors.RED, err=True)
    if result.status is RunStatus.FAILED:
        typer.echo(f"  original input: {result.original_input}", err=True)
        typer.echo(
            f"  replay with: quickprop replay {target} --seed {result.seed} --size {result.size}",
            err=True,
        )
    raise typer.Exit(1)


@app.command()
def replay(
    target: Annotated[str, typer.Argument(help="Property to replay, as module:attribute.")],
    seed: Annotated[int, typer.Option("--seed", help="Seed from the failure report.")],
    size: Annotated[int, typer.Option("--size", help="Size from the failure report.", min=0)],
    app_dir: AppDirOption = Path("."),
) -> None:
    """Re-run one trial exactly and print its verdict (no shrinking)."""
    prop = _load_or_exit(target, app_dir)
    verdict = Runner().replay(prop, seed, size)
    colour = typer.colors.RED if verdict.status is TestStatus.FAIL else typer.colors.GREEN
    typer.secho(f"{verdict.status}: {verdict.input}", fg=colour)
    if verdict.error is not None:
        typer.echo(f"  raised {verdict.error}")
    if verdict.status is TestStatus.FAIL:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
