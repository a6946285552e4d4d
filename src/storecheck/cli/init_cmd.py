"""storecheck init -- Initialize a .storecheck/ project directory.

Creates the config template, an .env.example listing the credential
variables, and the acceptance suite's fixtures directory.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.tree import Tree

from storecheck.credentials import env_var_names
from storecheck.models import CREDENTIAL_PROFILES, DEFAULT_BASE_URL, DEFAULT_SPEC_DIR

console = Console()

# ── Sample file contents ──────────────────────────────────────────────────

_SAMPLE_CONFIG = f"""\
# StoreCheck project configuration

# Storefront under test (env STORECHECK_BASE_URL takes priority)
base_url: "{DEFAULT_BASE_URL}"

headless: true

viewport:
  width: 1280
  height: 720

# Evidence
video: true
screenshot_on_failure: true

# Milliseconds
timeouts:
  command: 8000
  page_load: 30000
  form: 10000
  submit_probe: 2000
  error: 5000

# Whole-test re-execution counts (storecheck run / storecheck run --open)
retries:
  run_mode: 2
  open_mode: 0

spec_dir: {DEFAULT_SPEC_DIR}
exclude_patterns:
  - "**/examples/*"
  - "**/practice/*"

# Credentials belong in the environment or .env. Never commit them here.
"""

_SAMPLE_FIXTURE = """\
name: "Store Check"
review: "Solid product, arrived on time and works exactly as described. Would buy again."
"""


def _sample_env() -> str:
    lines = ["# Copy to .env and fill in. Do not commit .env."]
    for profile in CREDENTIAL_PROFILES:
        email_var, password_var = env_var_names(profile)
        lines.append(f"{email_var}=")
        lines.append(f"{password_var}=")
    return "\n".join(lines) + "\n"


def init(
    dir: Path = typer.Option(
        Path("."),
        "--dir",
        "-d",
        help="Parent directory for .storecheck/ project. Defaults to current directory.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing .storecheck/ directory.",
    ),
) -> None:
    """Initialize a new StoreCheck project directory."""
    root = dir.resolve()
    project_dir = root / ".storecheck"

    if project_dir.exists() and not force:
        console.print(
            Panel(
                f"[yellow]Directory already exists:[/yellow] {project_dir}\n\n"
                "Use [bold]--force[/bold] to overwrite.",
                title="Already Initialized",
                border_style="yellow",
            )
        )
        raise typer.Exit(code=2)

    (project_dir / "evidence").mkdir(parents=True, exist_ok=True)
    fixtures_dir = root / DEFAULT_SPEC_DIR / "fixtures"
    fixtures_dir.mkdir(parents=True, exist_ok=True)

    written = [
        project_dir / "config.yaml",
        root / ".env.example",
        fixtures_dir / "example.yaml",
    ]
    written[0].write_text(_SAMPLE_CONFIG, encoding="utf-8")
    written[1].write_text(_sample_env(), encoding="utf-8")
    if force or not written[2].exists():
        written[2].write_text(_SAMPLE_FIXTURE, encoding="utf-8")

    tree = Tree(f"[bold green]{root}[/bold green]", guide_style="dim")
    for path in written:
        tree.add(f"[cyan]{path.relative_to(root)}[/cyan]")
    tree.add(f"[blue]{(project_dir / 'evidence').relative_to(root)}/[/blue]")

    console.print()
    console.print(
        Panel(
            tree,
            title="[bold green]StoreCheck Initialized[/bold green]",
            border_style="green",
        )
    )
    console.print()
    console.print("[dim]Next steps:[/dim]")
    console.print("  1. Copy [cyan].env.example[/cyan] to [cyan].env[/cyan] and fill in credentials")
    console.print("  2. Run [bold]storecheck install[/bold] to set up Playwright")
    console.print("  3. Run [bold]storecheck run[/bold]")
    console.print()
