"""
BrandKit MCP Server

Exposes the BrandKit checks as MCP tools:
- Domain names (via the Namecheap API, with extension suggestions for bare names)
- Social media usernames (via profile URL probes)
"""

import json
import logging

from mcp.server.fastmcp import FastMCP

from . import __version__
from .config import NamecheapConfig, load_config
from .domain_checker import DomainChecker
from .errors import ConfigurationError, IntegrationError
from .namecheap_client import NamecheapClient
from .social_checker import PLATFORMS, check_platforms_async, supported_platforms

logger = logging.getLogger(__name__)

# Initialize the MCP server
mcp = FastMCP("brandkit")
mcp._mcp_server.version = __version__

# Set by run() at startup; tools fall back to load_config() when unset
_config: NamecheapConfig | None = None


def configure(config: NamecheapConfig | None) -> None:
    global _config
    _config = config


def _get_config() -> NamecheapConfig:
    return _config if _config is not None else load_config()


# =============================================================================
# MCP Tools
# =============================================================================

@mcp.tool()
def version() -> str:
    """
    Get the version of the BrandKit MCP server.

    Returns:
        Version string including server name and version number.
    """
    return f"BrandKit MCP Server version {__version__}"


@mcp.tool()
def get_supported_platforms() -> str:
    """
    Get list of supported social media platforms.

    Returns:
        JSON with list of platform names that can be checked.
    """
    return json.dumps({
        "platforms": supported_platforms()
    })


@mcp.tool()
def check_domain(domain: str) -> str:
    """
    Check domain name availability.

    Args:
        domain: A full domain (e.g. "example.com") or a base name (e.g. "example").
                A full domain is checked exactly and includes a purchase link if available.
                A base name is checked across 14 common extensions.

    Returns:
        JSON with available, domain, message, and link (exact mode) or
        suggestions and summary (base name mode).
    """
    if not domain or not domain.strip():
        return json.dumps({"error": "No domain provided"})

    try:
        with NamecheapClient(_get_config()) as client:
            outcome = DomainChecker(client).check(domain)
    except ConfigurationError as e:
        return json.dumps({"error": str(e)})
    except IntegrationError as e:
        logger.warning("Domain check failed for %s: %s", domain, e)
        return json.dumps({"error": f"Domain check failed: {e}"})

    return json.dumps(outcome.to_dict())


@mcp.tool()
async def check_username(
    username: str,
    platforms: list[str] | None = None,
    onlyReportAvailable: bool = False
) -> str:
    """
    Check social media username availability across platforms.

    Availability is inferred from the profile page, so results are best-effort.
    Platforms that could not be checked are reported as unavailable.

    Args:
        username: The username to check, exactly as written (e.g. "john.doe" stays "john.doe").
        platforms: List of platforms to check (default: all supported platforms)
                   Supported: github, twitter, instagram, facebook, youtube, tiktok,
                   pinterest, linkedin, reddit, threads
        onlyReportAvailable: If true, only return available platforms in response

    Returns:
        JSON with username, available platforms, unavailable platforms (unless onlyReportAvailable).
    """
    if not username or not username.strip():
        return json.dumps({"error": "No username provided"})

    username = username.strip()

    if platforms is None:
        platforms = supported_platforms()
    else:
        platforms = [p.lower().strip() for p in platforms]
        unknown = [p for p in platforms if p not in PLATFORMS]
        if unknown:
            return json.dumps({"error": f"Unsupported platform(s): {', '.join(unknown)}"})

    if not platforms:
        return json.dumps({"error": "No valid platforms specified"})

    results = await check_platforms_async(username, platforms)

    response = {
        "username": username,
        "available": [r.platform for r in results if r.available],
    }

    if not onlyReportAvailable:
        response["unavailable"] = [r.platform for r in results if not r.available]

    return json.dumps(response)


def run(config: NamecheapConfig) -> None:
    """Run the MCP server over stdio with the startup configuration."""
    configure(config)
    mcp.run()
