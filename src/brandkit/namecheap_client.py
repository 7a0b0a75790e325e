"""
Namecheap XML API client.

Only the domain availability check (namecheap.domains.check) is used.
All domains in a request are checked in a single batched GET.
"""

import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass

import httpx

from .config import NamecheapConfig
from .errors import IntegrationError

logger = logging.getLogger(__name__)

# Suppress httpx request logging by default (shows API keys in URLs)
# Set BRANDKIT_DEBUG=1 to enable verbose HTTP logging
if not os.environ.get("BRANDKIT_DEBUG"):
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

NAMECHEAP_API_URL = "https://api.namecheap.com/xml.response"
NAMECHEAP_SANDBOX_API_URL = "https://api.sandbox.namecheap.com/xml.response"
CHECK_COMMAND = "namecheap.domains.check"

NC_XML_NS = "{http://api.namecheap.com/xml.response}"


@dataclass(frozen=True)
class DomainCheckResult:
    """Availability of one domain as reported by the registrar."""
    domain: str
    available: bool
    raw_status: str


def _parse_available(raw: str, domain: str) -> bool:
    flag = raw.strip().lower()
    if flag == "true":
        return True
    if flag == "false":
        return False
    raise IntegrationError(f"Unexpected availability flag {raw!r} for {domain}")


def parse_check_response(text: str, domains: list[str]) -> list[DomainCheckResult]:
    """
    Parse a namecheap.domains.check XML payload.

    Returns one result per requested domain, in request order.

    Raises:
        IntegrationError: on malformed XML, API errors, or missing results.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise IntegrationError(f"Invalid XML from registrar: {e}") from e

    errors = root.findall(f"{NC_XML_NS}Errors/{NC_XML_NS}Error")
    if errors or root.attrib.get("Status", "").upper() == "ERROR":
        messages = [f"{e.attrib.get('Number', '?')}: {(e.text or '').strip()}" for e in errors]
        raise IntegrationError(f"Registrar API error: {'; '.join(messages) or 'unknown error'}")

    command_response = root.find(f"{NC_XML_NS}CommandResponse")
    if command_response is None:
        raise IntegrationError("Invalid API response structure: missing CommandResponse")

    by_domain: dict[str, DomainCheckResult] = {}
    for elem in command_response.findall(f"{NC_XML_NS}DomainCheckResult"):
        name = elem.attrib.get("Domain", "").strip()
        raw = elem.attrib.get("Available")
        if not name or raw is None:
            raise IntegrationError("Invalid API response structure: incomplete DomainCheckResult")
        by_domain[name.lower()] = DomainCheckResult(
            domain=name,
            available=_parse_available(raw, name),
            raw_status=raw,
        )

    results = []
    for domain in domains:
        result = by_domain.get(domain.lower())
        if result is None:
            raise IntegrationError(f"No availability result for {domain}")
        results.append(result)

    return results


class NamecheapClient:
    """
    Client for the Namecheap XML API.

    Usage:
        with NamecheapClient(config) as client:
            results = client.check_domains(["example.com", "example.net"])
    """

    def __init__(self, config: NamecheapConfig, http_client: httpx.Client | None = None):
        self.config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=config.timeout)

    @property
    def base_url(self) -> str:
        return NAMECHEAP_SANDBOX_API_URL if self.config.sandbox else NAMECHEAP_API_URL

    def __enter__(self) -> "NamecheapClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def build_query(self, command: str, params: dict | None = None) -> dict:
        """Build the query parameters for an API call."""
        query = {
            "ApiUser": self.config.api_user,
            "ApiKey": self.config.api_key,
            "UserName": self.config.username,
            "ClientIp": self.config.client_ip,
            "Command": command,
        }
        query.update(params or {})
        return query

    def _request(self, command: str, params: dict | None = None) -> str:
        """Perform the GET request and return the response body."""
        query = self.build_query(command, params)
        try:
            response = self._client.get(self.base_url, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise IntegrationError(f"API call failed with HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise IntegrationError(f"API call failed: {e}") from e
        return response.text

    def check_domains(self, domains: list[str]) -> list[DomainCheckResult]:
        """
        Check availability for a batch of fully-qualified domains.

        Args:
            domains: Domain names such as "example.com"

        Returns:
            One DomainCheckResult per input domain, in input order.

        Raises:
            IntegrationError: if the call fails or the response can't be used.
        """
        if not domains:
            raise ValueError("No domains to check")

        logger.debug("Checking %d domain(s) with %s", len(domains), CHECK_COMMAND)
        text = self._request(CHECK_COMMAND, {"DomainList": ",".join(domains)})
        return parse_check_response(text, domains)
