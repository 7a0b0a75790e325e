"""
Configuration for BrandKit.

The Namecheap API needs four credentials: API user, API key, account
username and the whitelisted client IP.

Lookup order, per credential:
1. Environment variable (a .env file in the working directory is loaded first)
2. macOS Keychain (API key only, if on macOS)
3. Config file (fallback)
"""

import json
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from .errors import ConfigurationError

# Keychain service name
KEYCHAIN_SERVICE = "brandkit.namecheap"
KEYCHAIN_ACCOUNT = "namecheap"

# Credential field -> environment variable
ENV_VARS = {
    "api_user": "NAMECHEAP_API_USER",
    "api_key": "NAMECHEAP_API_KEY",
    "username": "NAMECHEAP_USERNAME",
    "client_ip": "CLIENT_IP",
}

SANDBOX_ENV = "NAMECHEAP_SANDBOX"
TIMEOUT_ENV = "BRANDKIT_TIMEOUT"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class NamecheapConfig:
    """Registrar credentials and connection settings, built once at startup."""
    api_user: str
    api_key: str
    username: str
    client_ip: str
    sandbox: bool = False
    timeout: float = DEFAULT_TIMEOUT


def _is_macos() -> bool:
    """Check if running on macOS."""
    return sys.platform == "darwin"


def _keychain_get(service: str, account: str) -> str | None:
    """Get a password from macOS Keychain."""
    try:
        result = subprocess.run(
            ["security", "find-generic-password", "-s", service, "-a", account, "-w"],
            capture_output=True,
            text=True
        )
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout.strip()
    except (subprocess.SubprocessError, FileNotFoundError):
        pass
    return None


def _keychain_set(service: str, account: str, password: str) -> bool:
    """Store a password in macOS Keychain."""
    try:
        # Delete existing entry first (ignore errors)
        subprocess.run(
            ["security", "delete-generic-password", "-s", service, "-a", account],
            capture_output=True
        )
        result = subprocess.run(
            ["security", "add-generic-password", "-s", service, "-a", account, "-w", password, "-U"],
            capture_output=True
        )
        return result.returncode == 0
    except (subprocess.SubprocessError, FileNotFoundError):
        return False


def get_config_dir() -> Path:
    """Get the config directory for this app."""
    if os.name == 'nt':  # Windows
        base = Path(os.environ.get('APPDATA', Path.home()))
    else:  # macOS, Linux
        base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))

    return base / 'brandkit'


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / 'config.json'


def load_config_file() -> dict:
    """Read the JSON config file, returning {} if missing or unreadable."""
    config_file = get_config_file()
    try:
        if config_file.exists():
            data = json.loads(config_file.read_text())
            if isinstance(data, dict):
                return data
    except (json.JSONDecodeError, OSError):
        pass
    return {}


def _lookup(field: str, env: Mapping[str, str], file_config: dict) -> tuple[str | None, str | None]:
    """Return (value, source) for one credential field."""
    if value := env.get(ENV_VARS[field], "").strip():
        return value, "environment variable"

    if field == "api_key" and _is_macos():
        if value := _keychain_get(KEYCHAIN_SERVICE, KEYCHAIN_ACCOUNT):
            return value, "macOS Keychain"

    value = file_config.get(field)
    if isinstance(value, str) and value.strip():
        return value.strip(), "config file"

    return None, None


def _parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def _file_flag(value) -> bool:
    """JSON booleans as-is, strings parsed like environment values."""
    if isinstance(value, str):
        return _parse_bool(value)
    return value is True


def load_config(environ: Mapping[str, str] | None = None) -> NamecheapConfig:
    """
    Build the registrar configuration.

    Args:
        environ: Mapping to read variables from. Defaults to os.environ,
                 in which case a .env file is loaded into it first.

    Raises:
        ConfigurationError: if any credential is missing, listing all of them.
    """
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ

    file_config = load_config_file()

    values = {}
    missing = []
    for field, env_var in ENV_VARS.items():
        value, _ = _lookup(field, environ, file_config)
        if value is None:
            missing.append(env_var)
        else:
            values[field] = value

    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}. "
            "Set them in the environment or a .env file, or run: brandkit --setup",
            missing=missing,
        )

    timeout = DEFAULT_TIMEOUT
    if raw_timeout := environ.get(TIMEOUT_ENV, "").strip():
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"{TIMEOUT_ENV} must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigurationError(f"{TIMEOUT_ENV} must be positive, got {raw_timeout!r}")

    sandbox = _parse_bool(environ.get(SANDBOX_ENV)) or _file_flag(file_config.get("sandbox"))

    return NamecheapConfig(sandbox=sandbox, timeout=timeout, **values)


def get_config_sources(environ: Mapping[str, str] | None = None) -> dict[str, str | None]:
    """Determine where each credential comes from (for display purposes)."""
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ

    file_config = load_config_file()
    return {field: _lookup(field, environ, file_config)[1] for field in ENV_VARS}


def save_config(values: Mapping[str, str]) -> bool:
    """
    Store credentials.

    On macOS: API key goes to Keychain, the rest to the config file.
    On other platforms: everything goes to the config file.
    """
    values = {k: v for k, v in values.items() if k in ENV_VARS and v}

    if _is_macos() and "api_key" in values:
        if not _keychain_set(KEYCHAIN_SERVICE, KEYCHAIN_ACCOUNT, values.pop("api_key")):
            return False

    try:
        config_dir = get_config_dir()
        config_dir.mkdir(parents=True, exist_ok=True)

        config = load_config_file()
        config.update(values)

        config_file = get_config_file()
        config_file.write_text(json.dumps(config, indent=2))
        if os.name != 'nt':
            config_file.chmod(0o600)
        return True
    except OSError:
        return False


def mask_key(key: str) -> str:
    """Mask a secret for display."""
    if len(key) > 8:
        return key[:4] + "*" * (len(key) - 8) + key[-4:]
    elif len(key) > 4:
        return key[:2] + "*" * (len(key) - 2)
    else:
        return "*" * len(key)
