"""Shared fixtures: fake Namecheap API and fake profile pages over httpx.MockTransport."""

import httpx
import pytest

from brandkit.config import NamecheapConfig
from brandkit.namecheap_client import NamecheapClient

XML_NS = "http://api.namecheap.com/xml.response"


def namecheap_xml(availability: dict[str, str]) -> str:
    """Build a namecheap.domains.check response for {domain: "true"/"false"}."""
    rows = "\n".join(
        f'    <DomainCheckResult Domain="{domain}" Available="{flag}" ErrorNo="0" '
        f'Description="" IsPremiumName="false" PremiumRegistrationPrice="0" />'
        for domain, flag in availability.items()
    )
    return f"""<?xml version="1.0" encoding="utf-8"?>
<ApiResponse Status="OK" xmlns="{XML_NS}">
  <Errors />
  <Warnings />
  <RequestedCommand>namecheap.domains.check</RequestedCommand>
  <CommandResponse Type="namecheap.domains.check">
{rows}
  </CommandResponse>
  <Server>PHX01APIEXT01</Server>
  <GMTTimeDifference>--5:00</GMTTimeDifference>
  <ExecutionTime>0.112</ExecutionTime>
</ApiResponse>"""


def namecheap_error_xml(number: str, message: str) -> str:
    return f"""<?xml version="1.0" encoding="utf-8"?>
<ApiResponse Status="ERROR" xmlns="{XML_NS}">
  <Errors>
    <Error Number="{number}">{message}</Error>
  </Errors>
  <Warnings />
  <RequestedCommand>namecheap.domains.check</RequestedCommand>
  <CommandResponse />
</ApiResponse>"""


class FakeRegistrar:
    """
    Stand-in for the Namecheap API.

    Domains listed in `available` answer "true", everything else "false".
    Set `status_code`, `body` or `exc` to simulate failures.
    """

    def __init__(self, available=()):
        self.available = set(available)
        self.status_code = 200
        self.body: str | None = None
        self.exc: Exception | None = None
        self.requests: list[httpx.Request] = []

    @property
    def batches(self) -> list[list[str]]:
        """DomainList of every request made, split back into names."""
        return [r.url.params["DomainList"].split(",") for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.body is not None:
            return httpx.Response(self.status_code, text=self.body)

        domains = request.url.params["DomainList"].split(",")
        flags = {d: "true" if d in self.available else "false" for d in domains}
        return httpx.Response(self.status_code, text=namecheap_xml(flags))

    def client(self, config: NamecheapConfig) -> NamecheapClient:
        transport = httpx.MockTransport(self.handler)
        return NamecheapClient(config, http_client=httpx.Client(transport=transport))


class FakeProfiles:
    """
    Stand-in for social profile pages, keyed by URL.

    Unknown URLs answer 404. Values are (status_code, body) tuples or an
    exception instance to raise.
    """

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        page = self.pages.get(str(request.url), (404, "Not Found"))
        if isinstance(page, Exception):
            raise page
        status_code, body = page
        if isinstance(body, bytes):
            return httpx.Response(status_code, content=body)
        return httpx.Response(status_code, text=body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def async_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def config() -> NamecheapConfig:
    return NamecheapConfig(
        api_user="apiuser",
        api_key="0123456789abcdef",
        username="acct",
        client_ip="203.0.113.7",
    )


@pytest.fixture
def registrar() -> FakeRegistrar:
    return FakeRegistrar()


@pytest.fixture
def profiles() -> FakeProfiles:
    return FakeProfiles()


@pytest.fixture
def credentials_env(monkeypatch, tmp_path):
    """Isolate config lookups: empty config dir, no .env, credentials in the environment."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setattr("brandkit.config.load_dotenv", lambda **kwargs: False)
    monkeypatch.setattr("brandkit.config._is_macos", lambda: False)
    for name in ("NAMECHEAP_SANDBOX", "BRANDKIT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    values = {
        "NAMECHEAP_API_USER": "apiuser",
        "NAMECHEAP_API_KEY": "0123456789abcdef",
        "NAMECHEAP_USERNAME": "acct",
        "CLIENT_IP": "203.0.113.7",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values
