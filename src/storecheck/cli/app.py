"""StoreCheck CLI -- Main Typer entry point.

Registers all subcommands and provides --version / --verbose global options.
"""

from __future__ import annotations

import typer
from rich.console import Console

from storecheck import __version__

TAGLINE = "Resilient browser acceptance checks for storefronts."

console = Console()

# ── Version callback ──────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print("storecheck", style="bold cyan", end=" ")
        console.print(f"v{__version__}", style="bold")
        console.print(f"  {TAGLINE}", style="dim")
        raise typer.Exit()


# ── Main app ──────────────────────────────────────────────────────────────

app = typer.Typer(
    name="storecheck",
    help=TAGLINE,
    rich_markup_mode="rich",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show StoreCheck version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
) -> None:
    """StoreCheck -- login, browse, cart and checkout acceptance tests for e-commerce storefronts."""
    if verbose:
        import logging

        logging.basicConfig(level=logging.DEBUG, format="%(name)s  %(message)s")


# ── Register subcommands ──────────────────────────────────────────────────

from storecheck.cli.config_cmd import config_app  # noqa: E402
from storecheck.cli.init_cmd import init  # noqa: E402
from storecheck.cli.install import install  # noqa: E402
from storecheck.cli.run import run  # noqa: E402

app.command(name="init", help="Initialize a .storecheck/ project and acceptance suite skeleton.")(init)
app.command(name="install", help="Install browser dependencies (Playwright).")(install)
app.command(name="run", help="Run the acceptance suite with whole-test retries.")(run)
app.add_typer(config_app, name="config", help="View StoreCheck configuration.")
