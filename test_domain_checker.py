"""
Tests for domain availability checking (exact and suggestion modes).

Usage:
    pytest test_domain_checker.py
"""

import pytest

from brandkit.domain_checker import (
    COMMON_TLDS,
    DomainChecker,
    is_exact_domain,
    purchase_link,
    summary_category,
    summary_message,
)
from brandkit.errors import IntegrationError
from conftest import FakeRegistrar


def check(config, registrar, domain):
    with registrar.client(config) as client:
        return DomainChecker(client).check(domain)


# =============================================================================
# Exact-check mode
# =============================================================================

def test_exact_domain_available(config):
    registrar = FakeRegistrar(available={"brandkit.io"})

    outcome = check(config, registrar, "brandkit.io")

    assert registrar.batches == [["brandkit.io"]]
    assert outcome.available is True
    assert outcome.domain == "brandkit.io"
    assert outcome.link == "https://www.namecheap.com/domains/registration/results/?domain=brandkit.io"
    assert "brandkit.io is available" in outcome.message
    assert outcome.suggestions is None


def test_exact_domain_taken(config, registrar):
    outcome = check(config, registrar, "google.com")

    assert registrar.batches == [["google.com"]]
    assert outcome.available is False
    assert outcome.link is None
    assert outcome.suggestions is None
    assert "google.com is taken" in outcome.message


def test_input_is_stripped(config, registrar):
    check(config, registrar, "  example.com \n")

    assert registrar.batches == [["example.com"]]


def test_empty_input_is_rejected(config, registrar):
    with pytest.raises(ValueError):
        check(config, registrar, "   ")
    assert registrar.requests == []


def test_dot_decides_mode():
    assert is_exact_domain("example.com")
    assert is_exact_domain("sub.example.co.uk")
    assert not is_exact_domain("example")


# =============================================================================
# Suggestion mode
# =============================================================================

def test_suggestions_cover_common_tlds_in_order(config, registrar):
    outcome = check(config, registrar, "foo")

    expected = [f"foo{tld}" for tld in COMMON_TLDS]
    assert len(expected) == 14
    assert registrar.batches == [expected]
    assert [domain for domain, _ in outcome.suggestions] == expected
    assert outcome.available is False
    assert outcome.domain == "foo"
    assert outcome.link is None


def test_suggestions_never_mark_base_available(config):
    registrar = FakeRegistrar(available={f"foo{tld}" for tld in COMMON_TLDS})

    outcome = check(config, registrar, "foo")

    assert outcome.available is False
    assert outcome.available_count == 14
    assert outcome.summary == "many"


def test_five_available_is_some(config):
    available = {f"foo{tld}" for tld in COMMON_TLDS[:5]}
    registrar = FakeRegistrar(available=available)

    outcome = check(config, registrar, "foo")

    assert outcome.summary == "some"
    assert outcome.message == summary_message("foo", 5)
    assert "Some good domain extensions" in outcome.message
    assert "foo" in outcome.message
    assert [a for _, a in outcome.suggestions] == [True] * 5 + [False] * 9


@pytest.mark.parametrize("count, category", [
    (0, "none"),
    (1, "few"), (2, "few"), (3, "few"),
    (4, "some"), (5, "some"), (6, "some"),
    (7, "many"), (10, "many"), (14, "many"),
])
def test_summary_thresholds(count, category):
    assert summary_category(count) == category


def test_summary_messages_name_the_base():
    assert "No common domain extensions" in summary_message("acme", 0)
    assert "Only a few options" in summary_message("acme", 2)
    assert "Many domain extensions" in summary_message("acme", 9)
    assert all("acme" in summary_message("acme", n) for n in (0, 2, 5, 9))


# =============================================================================
# Failures propagate
# =============================================================================

@pytest.mark.parametrize("domain", ["example.com", "example"])
def test_integration_failure_is_not_masked(config, registrar, domain):
    registrar.status_code = 503
    registrar.body = "Service Unavailable"

    with pytest.raises(IntegrationError):
        check(config, registrar, domain)


# =============================================================================
# Serialization
# =============================================================================

def test_exact_outcome_to_dict(config):
    registrar = FakeRegistrar(available={"brandkit.io"})

    data = check(config, registrar, "brandkit.io").to_dict()

    assert data["available"] is True
    assert data["link"] == purchase_link("brandkit.io")
    assert "suggestions" not in data
    assert "summary" not in data


def test_suggestion_outcome_to_dict(config):
    registrar = FakeRegistrar(available={"foo.dev"})

    data = check(config, registrar, "foo").to_dict()

    assert "link" not in data
    assert data["summary"] == "few"
    assert data["suggestions"][4] == {"domain": "foo.dev", "available": True}
    assert len(data["suggestions"]) == 14


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
