"""BrandKit CLI - check domain and social username availability."""

import argparse
import asyncio
import json
import logging
import os

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from .config import load_config
from .domain_checker import DomainChecker, DomainQueryOutcome
from .errors import ConfigurationError, IntegrationError
from .namecheap_client import NamecheapClient
from .social_checker import (
    UsernameCheckResult,
    check_platforms_async,
    strip_extension,
    supported_platforms,
)

console = Console()

ALL_CHOICE = "all"
PANEL_WIDTH = 60


def configure_logging() -> None:
    level = logging.DEBUG if os.environ.get("BRANDKIT_DEBUG") else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def parse_platforms(value: str) -> list[str]:
    """
    Parse a comma-separated platform selection.

    "all" selects every supported platform and can't be combined with others.
    Numbers refer to positions in supported_platforms() (1-based).

    Raises:
        ValueError: if the selection is empty, mixed, or names an unknown platform.
    """
    available = supported_platforms()
    selected = []
    for item in value.split(","):
        item = item.strip().lower()
        if not item:
            continue
        if item.isdigit() and 1 <= int(item) <= len(available):
            item = available[int(item) - 1]
        if item != ALL_CHOICE and item not in available:
            raise ValueError(f"Unknown platform: {item}")
        if item not in selected:
            selected.append(item)

    if not selected:
        raise ValueError("You must select at least one platform.")
    if ALL_CHOICE in selected:
        if len(selected) > 1:
            raise ValueError(f"Please select either '{ALL_CHOICE}' or specific platforms, not both.")
        return available
    return selected


def intro_banner(out: Console) -> None:
    body = Text.assemble(
        ("BrandKit\n\n", "bold cyan"),
        "The fastest way to check domain and\nsocial media username availability!",
        justify="center",
    )
    out.print(Panel(body, title="🚀 Welcome to BrandKit", title_align="left", width=PANEL_WIDTH))


def farewell_banner(out: Console) -> None:
    body = Text("Thanks for using BrandKit!\nStart building your brand today. ✨", style="magenta", justify="center")
    out.print(Panel(body, title="👋", title_align="left", width=PANEL_WIDTH))


def show_result_box(out: Console, outcome: DomainQueryOutcome) -> None:
    if not outcome.message.strip():
        return
    if outcome.suggestions is not None:
        style = "white"
    else:
        style = "green" if outcome.available else "red"
    out.print()
    out.print(Panel(Text(outcome.message, style=style, justify="center"),
                    title="✦ Domain Status", title_align="left", width=PANEL_WIDTH))


def print_suggestions_table(out: Console, suggestions: list[tuple[str, bool]]) -> None:
    table = Table(title="Top Domain Extensions")
    table.add_column("Domain", style="bold")
    table.add_column("Status")

    for domain, available in suggestions:
        status = Text("✔ Available", style="green") if available else Text("✖ Taken", style="red")
        table.add_row(domain, status)

    out.print(table)


def print_purchase_link(out: Console, link: str) -> None:
    out.print()
    out.print(Text.assemble("🔗 ", ("Purchase here:", "bold green"), " ", (link, "underline")))
    out.print()


def print_username_table(out: Console, username: str, results: list[UsernameCheckResult]) -> None:
    table = Table(title=f"Username: {username}")
    table.add_column("📡 Platform", justify="center")
    table.add_column("🔍 Status", justify="center")

    for r in results:
        status = Text("✔ Available", style="green") if r.available else Text("✘ Taken", style="red")
        table.add_row(r.platform.capitalize(), status)

    out.print(table)


def prompt_platform_selection(out: Console) -> list[str]:
    """Ask until a valid platform selection is entered."""
    platforms = supported_platforms()
    out.print()
    out.print(f"  0. 🌍 All supported platforms ({ALL_CHOICE})")
    for i, platform in enumerate(platforms, 1):
        out.print(f"  {i}. {platform}")

    while True:
        answer = Prompt.ask("[cyan]✔ Select platforms to check (comma-separated names or numbers)[/cyan]",
                            console=out, default="")
        answer = ",".join(ALL_CHOICE if a.strip() == "0" else a for a in answer.split(","))
        try:
            return parse_platforms(answer)
        except ValueError as e:
            out.print(Text(f"⚠️  {e}", style="yellow"))


def check_usernames(username: str, platforms: list[str]) -> list[UsernameCheckResult]:
    return asyncio.run(check_platforms_async(username, platforms))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brandkit",
        description="Check domain and social media username availability.",
    )
    parser.add_argument(
        "--domain",
        type=str,
        metavar="DOMAIN",
        help="Domain (example.com) or base name (example) to check; prompts if omitted"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of the interactive display (requires --domain)"
    )
    parser.add_argument(
        "--platforms",
        type=str,
        metavar="LIST",
        help="Comma-separated platforms to check, or 'all'; skips the social prompt"
    )
    return parser


def run(args: argparse.Namespace, out: Console | None = None) -> int:
    """Run the check flow. Returns the process exit code."""
    out = out or console

    try:
        config = load_config()
    except ConfigurationError as e:
        out.print(Text(f"✗ {e}", style="red"))
        return 2

    platforms = None
    if args.platforms:
        try:
            platforms = parse_platforms(args.platforms)
        except ValueError as e:
            out.print(Text(f"✗ {e}", style="red"))
            return 2

    if not args.json:
        intro_banner(out)

    domain = args.domain or Prompt.ask("[blue]🌐 Enter domain (e.g. example or example.com)[/blue]", console=out)

    try:
        with NamecheapClient(config) as client:
            outcome = DomainChecker(client).check(domain)
    except ValueError as e:
        out.print(Text(f"✗ {e}", style="red"))
        return 2
    except IntegrationError as e:
        out.print(Text(f"✗ Domain check failed: {e}", style="red"))
        return 1

    username = strip_extension(outcome.domain)

    if args.json:
        payload = {"domain": outcome.to_dict()}
        if platforms:
            results = check_usernames(username, platforms)
            payload["usernames"] = {
                "username": username,
                "results": [{"platform": r.platform, "available": r.available} for r in results],
            }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    if outcome.suggestions is not None:
        out.print()
        print_suggestions_table(out, outcome.suggestions)

    show_result_box(out, outcome)

    if outcome.link:
        print_purchase_link(out, outcome.link)

    if platforms is None and Confirm.ask(
        "[cyan]📱 Check if the username is available on social platforms?[/cyan]", console=out
    ):
        platforms = prompt_platform_selection(out)

    if platforms:
        results = check_usernames(username, platforms)
        out.print()
        print_username_table(out, username, results)

    farewell_banner(out)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.json and not args.domain:
        parser.error("--json requires --domain")

    configure_logging()

    try:
        return run(args)
    except KeyboardInterrupt:
        console.print("\nInterrupted")
        return 130
