"""
Domain availability checking.

A name containing a dot is checked as-is (exact mode). A bare name is
expanded across COMMON_TLDS and checked in one batch (suggestion mode).
"""

from dataclasses import asdict, dataclass

from .namecheap_client import NamecheapClient

COMMON_TLDS = (
    ".com", ".net", ".org", ".io", ".dev", ".app", ".co",
    ".xyz", ".tech", ".site", ".link", ".me", ".info", ".blog",
)

PURCHASE_URL = "https://www.namecheap.com/domains/registration/results/?domain={domain}"

SUMMARY_MESSAGES = {
    "none": "😞 No common domain extensions are available for '{base}'. Try a different name.",
    "few": "⚠️ Only a few options are available for '{base}'. Consider securing one quickly!",
    "some": "🙂 Some good domain extensions are still available for '{base}'.",
    "many": "🎉 Great news! Many domain extensions are available for '{base}'.",
}


@dataclass
class DomainQueryOutcome:
    """Result of a single domain check."""
    available: bool
    domain: str
    message: str
    link: str | None = None
    suggestions: list[tuple[str, bool]] | None = None
    summary: str | None = None

    @property
    def available_count(self) -> int:
        return sum(1 for _, available in self.suggestions or [] if available)

    def to_dict(self) -> dict:
        """JSON-ready dict, leaving out fields that don't apply."""
        data = asdict(self)
        if self.suggestions is not None:
            data["suggestions"] = [
                {"domain": domain, "available": available}
                for domain, available in self.suggestions
            ]
        return {k: v for k, v in data.items() if v is not None}


def is_exact_domain(domain: str) -> bool:
    """True if the input already includes a TLD."""
    return "." in domain


def purchase_link(domain: str) -> str:
    return PURCHASE_URL.format(domain=domain)


def summary_category(available_count: int) -> str:
    """Bucket the number of available extensions: none, few, some or many."""
    if available_count <= 0:
        return "none"
    if available_count <= 3:
        return "few"
    if available_count <= 6:
        return "some"
    return "many"


def summary_message(base_domain: str, available_count: int) -> str:
    return SUMMARY_MESSAGES[summary_category(available_count)].format(base=base_domain)


class DomainChecker:
    """Checks a domain or base name against the registrar."""

    def __init__(self, client: NamecheapClient):
        self.client = client

    def check(self, domain: str) -> DomainQueryOutcome:
        """
        Check availability of an exact domain or suggest extensions for a base name.

        Raises:
            ValueError: if the input is empty.
            IntegrationError: if the registrar call fails.
        """
        domain = domain.strip()
        if not domain:
            raise ValueError("No domain provided")

        if is_exact_domain(domain):
            return self.check_exact_domain(domain)
        return self.check_domain_suggestions(domain)

    def check_exact_domain(self, domain: str) -> DomainQueryOutcome:
        [result] = self.client.check_domains([domain])

        if result.available:
            return DomainQueryOutcome(
                available=True,
                domain=result.domain,
                message=f"✔ Domain {domain} is available!",
                link=purchase_link(domain),
            )
        return DomainQueryOutcome(
            available=False,
            domain=result.domain,
            message=f"✘ Domain {domain} is taken.",
        )

    def check_domain_suggestions(self, base_domain: str) -> DomainQueryOutcome:
        candidates = [f"{base_domain}{tld}" for tld in COMMON_TLDS]
        results = self.client.check_domains(candidates)

        suggestions = [(r.domain, r.available) for r in results]
        available_count = sum(1 for _, available in suggestions if available)

        # A base name without a TLD is never itself available
        return DomainQueryOutcome(
            available=False,
            domain=base_domain,
            message=summary_message(base_domain, available_count),
            suggestions=suggestions,
            summary=summary_category(available_count),
        )
