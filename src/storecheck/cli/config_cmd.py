"""storecheck config -- View StoreCheck configuration.

Subcommands: show, set-credentials.
"""

from __future__ import annotations

import os
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from storecheck.config import StoreCheckConfig, StoreCheckConfigError, find_project_dir
from storecheck.credentials import (
    env_var_names,
    mask_secret,
    parse_env_file,
    parse_yaml_credentials,
    resolve_credentials,
)
from storecheck.models import CREDENTIAL_PROFILES

console = Console()

config_app = typer.Typer(
    name="config",
    help="View StoreCheck configuration.",
    no_args_is_help=True,
)


def _load_raw_config(path: Path) -> dict:
    if not path.is_file():
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data if isinstance(data, dict) else {}


@config_app.command(name="show")
def config_show(
    dir: Path | None = typer.Option(
        None,
        "--dir",
        "-d",
        help="Path to .storecheck/ directory.",
    ),
) -> None:
    """Show the resolved StoreCheck configuration.

    Merges config.yaml, defaults and environment overrides. Credential
    secrets are masked.
    """
    project_dir = dir or find_project_dir()
    config_path = project_dir / "config.yaml"

    try:
        config = StoreCheckConfig.load(project_dir)
    except StoreCheckConfigError as exc:
        console.print(Panel(f"[red]{exc}[/red]", title="[red]Config Error[/red]", border_style="red"))
        raise typer.Exit(code=2)

    table = Table(title="StoreCheck Configuration", border_style="cyan")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_column("Source", style="dim")

    table.add_row("Project Dir", str(project_dir), "resolved")
    table.add_row("Config File", str(config_path), "exists" if config_path.is_file() else "missing")
    table.add_row("Base URL", config.base_url, "env" if os.environ.get("STORECHECK_BASE_URL") else "config")
    table.add_row("Login Route", config.login_route, "config")
    table.add_row("Spec Dir", str(config.spec_dir), "config")
    table.add_row("Fixtures Dir", str(config.fixtures_dir), "config")
    table.add_row("Evidence Dir", str(config.evidence_dir), "config")
    table.add_row("", "", "")
    table.add_row("Headless", str(config.headless), "env" if os.environ.get("STORECHECK_HEADLESS") else "config")
    table.add_row("Viewport", f"{config.viewport[0]}x{config.viewport[1]}", "config")
    table.add_row("Video", str(config.video), "config")
    table.add_row("Screenshot On Failure", str(config.screenshot_on_failure), "config")
    table.add_row("Command Timeout", f"{config.command_timeout_ms} ms", "config")
    table.add_row("Page Load Timeout", f"{config.page_load_timeout_ms} ms", "config")
    table.add_row("Form Timeout", f"{config.form_timeout_ms} ms", "config")
    table.add_row("Submit Probe Timeout", f"{config.submit_probe_timeout_ms} ms", "config")
    table.add_row("Error Timeout", f"{config.error_timeout_ms} ms", "config")
    table.add_row("Poll Interval", f"{config.poll_interval_ms} ms", "config")
    table.add_row("Retries", f"run {config.retries_run_mode} / open {config.retries_open_mode}", "config")
    table.add_row("", "", "")

    for profile in CREDENTIAL_PROFILES:
        try:
            creds = resolve_credentials(profile, project_dir)
            display = f"{creds.identifier} / {mask_secret(creds.secret)}"
            source = _identify_credentials_source(profile, project_dir)
        except StoreCheckConfigError:
            display = "[red]NOT SET[/red]"
            source = "-"
        table.add_row(f"Credentials ({profile})", display, source)

    console.print()
    console.print(table)
    console.print()


def _identify_credentials_source(profile: str, project_dir: Path) -> str:
    """Determine where a credential profile is coming from."""
    email_var, password_var = env_var_names(profile)
    if os.environ.get(email_var) and os.environ.get(password_var):
        return f"env: {email_var}"

    env_path = Path(".env")
    if env_path.exists() and parse_env_file(env_path, email_var) and parse_env_file(env_path, password_var):
        return ".env file"

    if parse_yaml_credentials(project_dir / "config.yaml", profile) is not None:
        return "config.yaml"

    return "~/.storecheck/config.yaml"


def _save_credentials(config_path: Path, profile: str, email: str, password: str) -> None:
    """Store ``credentials.<profile>`` in ``config_path``.

    A file without a ``credentials:`` block gets one appended, so its
    comments and layout are left alone.  Otherwise the file is rewritten.
    """
    data = _load_raw_config(config_path)
    entry = {"email": email, "password": password}

    if config_path.is_file() and "credentials" not in data:
        text = config_path.read_text(encoding="utf-8")
        if text and not text.endswith("\n"):
            text += "\n"
        block = yaml.dump({"credentials": {profile: entry}}, default_flow_style=False, sort_keys=False)
        config_path.write_text(text + block, encoding="utf-8")
        return

    section = data.get("credentials")
    if not isinstance(section, dict):
        section = {}
    section[profile] = entry
    data["credentials"] = section
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


@config_app.command(name="set-credentials")
def config_set_credentials(
    profile: str = typer.Argument("default", help="Credential profile: default or invalid."),
    global_config: bool = typer.Option(
        True,
        "--global/--project",
        help="Save to ~/.storecheck/config.yaml (default) or the project config.",
    ),
    dir: Path | None = typer.Option(
        None,
        "--dir",
        "-d",
        help="Path to .storecheck/ directory (with --project).",
    ),
) -> None:
    """Interactively store login credentials for a profile.

    The password prompt is hidden and the value is never echoed back.
    """
    if profile not in CREDENTIAL_PROFILES:
        console.print(f"[red]Unknown profile:[/red] {profile} (expected {', '.join(CREDENTIAL_PROFILES)})")
        raise typer.Exit(code=2)

    email = typer.prompt("Email").strip()
    password = typer.prompt("Password", hide_input=True).strip()
    if not email or not password:
        console.print("[red]Email and password cannot be empty.[/red]")
        raise typer.Exit(code=2)

    target_dir = Path.home() / ".storecheck" if global_config else (dir or find_project_dir())
    config_path = target_dir / "config.yaml"
    target_dir.mkdir(parents=True, exist_ok=True)
    _save_credentials(config_path, profile, email, password)

    if not global_config:
        console.print(
            "\n[yellow]Warning:[/yellow] plain-text password in the project config. "
            "Keep it out of version control, or use .env / --global instead."
        )
    console.print(f"\n[green]Credentials saved[/green] ({email} / {mask_secret(password)}) [dim]to {config_path}[/dim]")
    console.print(
        "\n[dim]Tip: STORECHECK_* environment variables take priority over config file values.[/dim]"
    )
