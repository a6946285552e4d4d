"""storecheck run -- Execute the acceptance suite.

Runs pytest over the configured suite directory in a subprocess.  Failed
tests are re-executed as a whole (``--last-failed``) up to the configured
retry count; this is the only retry mechanism in StoreCheck.  The exit
code is pytest's final exit code.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from storecheck.config import StoreCheckConfig, StoreCheckConfigError, find_project_dir

console = Console(stderr=True)

logger = logging.getLogger("storecheck.cli.run")

# pytest exit code for "tests ran and some failed"
PYTEST_TESTS_FAILED = 1


def _print_error(message: str, title: str = "Error", code: int = 2) -> None:
    console.print(Panel(f"[red]{message}[/red]", title=f"[red]{title}[/red]", border_style="red"))
    raise typer.Exit(code=code)


def build_pytest_command(
    config: StoreCheckConfig,
    targets: list[str],
    keyword: str | None = None,
    junit_xml: Path | None = None,
) -> list[str]:
    """Build the pytest argv for one suite execution."""
    cmd = [sys.executable, "-m", "pytest", *targets, "--storecheck-config", str(config.project_dir)]
    for pattern in config.exclude_patterns:
        cmd.append(f"--ignore-glob={pattern}")
    if keyword:
        cmd += ["-k", keyword]
    if junit_xml is not None:
        cmd.append(f"--junitxml={junit_xml}")
    return cmd


def _run_pytest(cmd: list[str], env: dict[str, str]) -> int:
    logger.debug("Running: %s", " ".join(cmd))
    return subprocess.run(cmd, env=env).returncode


def run(
    paths: list[str] | None = typer.Argument(
        None,
        help="Test files or directories. Defaults to the configured spec_dir.",
    ),
    open_mode: bool = typer.Option(
        False,
        "--open",
        help="Interactive mode: headed browser and the open_mode retry count.",
    ),
    retries: int | None = typer.Option(
        None,
        "--retries",
        "-r",
        min=0,
        help="Whole-test retries for failed tests (overrides config).",
    ),
    headed: bool = typer.Option(
        False,
        "--headed",
        help="Show the browser window.",
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="Storefront base URL (overrides config and env).",
    ),
    keyword: str | None = typer.Option(
        None,
        "-k",
        help="Only run tests matching this pytest keyword expression.",
    ),
    junit_xml: Path | None = typer.Option(
        None,
        "--junit-xml",
        help="Write a JUnit XML report of the final attempt.",
    ),
    dir: Path | None = typer.Option(
        None,
        "--dir",
        "-d",
        help="Path to .storecheck/ directory.",
    ),
) -> None:
    """Run the storefront acceptance suite."""
    project_dir = dir or find_project_dir()
    try:
        config = StoreCheckConfig.load(project_dir)
    except StoreCheckConfigError as exc:
        _print_error(str(exc), title="Config Error")

    targets = list(paths) if paths else [str(config.spec_dir)]
    missing = [t for t in targets if not Path(t).exists()]
    if missing:
        _print_error(
            f"Test path not found: {', '.join(missing)}\n\nTo fix: storecheck init, or pass paths explicitly",
            title="Suite Not Found",
        )

    budget = retries
    if budget is None:
        budget = config.retries_open_mode if open_mode else config.retries_run_mode

    env = os.environ.copy()
    if headed or open_mode:
        env["STORECHECK_HEADLESS"] = "false"
    if base_url:
        env["STORECHECK_BASE_URL"] = base_url

    cmd = build_pytest_command(config, targets, keyword=keyword, junit_xml=junit_xml)

    console.print(
        f"[bold]StoreCheck[/bold] {config.base_url if not base_url else base_url} "
        f"[dim]({', '.join(targets)}; retries: {budget})[/dim]"
    )
    start = time.monotonic()
    code = _run_pytest(cmd, env)
    attempt = 0
    while code == PYTEST_TESTS_FAILED and attempt < budget:
        attempt += 1
        console.print(f"\n[yellow]Re-running failed tests (retry {attempt}/{budget})[/yellow]\n")
        code = _run_pytest(cmd + ["--last-failed", "--last-failed-no-failures", "none"], env)

    duration = time.monotonic() - start
    if code == 0:
        console.print(
            Panel(
                f"[green]All tests passed[/green] in {duration:.1f}s"
                + (f" after {attempt} retr{'y' if attempt == 1 else 'ies'}" if attempt else ""),
                title="[bold green]PASS[/bold green]",
                border_style="green",
            )
        )
    else:
        console.print(
            Panel(
                f"[red]pytest exited with code {code}[/red] after {attempt + 1} attempt(s) in {duration:.1f}s\n\n"
                f"[dim]Evidence: {config.evidence_dir}[/dim]",
                title="[bold red]FAIL[/bold red]",
                border_style="red",
            )
        )
    raise typer.Exit(code=code)
