"""Login credential resolution for StoreCheck."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from storecheck.config import StoreCheckConfigError
from storecheck.models import CREDENTIAL_PROFILES


@dataclass(frozen=True)
class Credentials:
    """An (identifier, secret) pair for the storefront login form.

    The secret is excluded from ``repr()`` so it cannot leak through
    tracebacks, pytest assertion rewriting, or debug logs.
    """

    identifier: str
    secret: str = field(repr=False)

    def __str__(self) -> str:
        return f"{self.identifier} / {mask_secret(self.secret)}"


def env_var_names(profile: str) -> tuple[str, str]:
    """Return the (email, password) environment variable names for a profile."""
    prefix = f"STORECHECK_{profile.upper()}"
    return f"{prefix}_EMAIL", f"{prefix}_PASSWORD"


def resolve_credentials(profile: str = "default", project_dir: Path | None = None) -> Credentials:
    """Resolve login credentials for ``profile`` from multiple sources.

    Resolution order (highest priority first):
    1. STORECHECK_<PROFILE>_EMAIL / STORECHECK_<PROFILE>_PASSWORD environment variables
    2. .env file in current directory
    3. Project config (.storecheck/config.yaml, ``credentials:`` block)
    4. Global config (~/.storecheck/config.yaml)
    """
    if profile not in CREDENTIAL_PROFILES:
        raise StoreCheckConfigError(
            f"Unknown credential profile: {profile}\n\nExpected one of: {', '.join(CREDENTIAL_PROFILES)}"
        )
    email_var, password_var = env_var_names(profile)

    # 1. Environment variables
    email = os.environ.get(email_var)
    password = os.environ.get(password_var)
    if email and password:
        return Credentials(email, password)

    # 2. .env file
    env_path = Path(".env")
    if env_path.exists():
        email = parse_env_file(env_path, email_var)
        password = parse_env_file(env_path, password_var)
        if email and password:
            return Credentials(email, password)

    # 3. Project config
    if project_dir:
        config_path = project_dir / "config.yaml"
        if config_path.exists():
            creds = parse_yaml_credentials(config_path, profile)
            if creds:
                return creds

    # 4. Global config
    global_config = Path.home() / ".storecheck" / "config.yaml"
    if global_config.exists():
        creds = parse_yaml_credentials(global_config, profile)
        if creds:
            return creds

    raise StoreCheckConfigError(
        f"Credentials for profile '{profile}' not set\n\n"
        "StoreCheck reads login credentials from configuration, never from code.\n\n"
        "To fix:\n"
        f"  export {email_var}=user@example.com\n"
        f"  export {password_var}=...\n"
        "  or add them to .env (see .env.example)"
    )


def mask_secret(secret: str) -> str:
    """Mask a secret for display. Shows at most the first and last character."""
    if len(secret) <= 6:
        return "***"
    return f"{secret[0]}***{secret[-1]}"


def parse_env_file(path: Path, key_name: str) -> str | None:
    """Parse a .env file for a specific key."""
    try:
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line.startswith("#") or "=" not in line:
                    continue
                k, _, v = line.partition("=")
                if k.strip().removeprefix("export ").strip() == key_name:
                    return v.strip().strip("'\"")
    except OSError:
        pass
    return None


def parse_yaml_credentials(path: Path, profile: str) -> Credentials | None:
    """Parse a YAML config file for a ``credentials.<profile>`` block."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return None
    section = data.get("credentials") if isinstance(data, dict) else None
    if not isinstance(section, dict):
        return None
    block = section.get(profile) or {}
    if not isinstance(block, dict):
        return None
    email = block.get("email")
    password = block.get("password")
    if email and password:
        return Credentials(str(email), str(password))
    return None
