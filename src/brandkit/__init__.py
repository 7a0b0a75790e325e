"""
BrandKit

Check whether a domain name and matching social media usernames are available.
"""

__version__ = "0.2.0"


def main():
    """Main entry point for the CLI."""
    import sys

    # Handle CLI arguments before importing heavy dependencies
    if "--help" in sys.argv or "-h" in sys.argv:
        print_help()
        sys.exit(0)

    if "--version" in sys.argv or "-V" in sys.argv:
        print(f"brandkit {__version__}")
        sys.exit(0)

    if "--setup" in sys.argv:
        sys.exit(0 if run_setup() else 1)

    if "--show-config" in sys.argv:
        show_config()
        sys.exit(0)

    if "--mcp" in sys.argv:
        sys.exit(run_mcp())

    # Default: run the interactive check
    from .cli import main as cli_main
    sys.exit(cli_main(sys.argv[1:]))


def print_help():
    """Print help message."""
    print(f"""brandkit {__version__}

Check domain name and social media username availability.

Usage:
    brandkit                              Interactive check
    brandkit --domain=example.com         Check an exact domain
    brandkit --domain=example             Check 14 common extensions for a name
    brandkit --domain=example --json      Print the result as JSON
    brandkit --domain=example --platforms=github,reddit
                                          Also check usernames without prompting
    brandkit --setup                      Configure Namecheap credentials interactively
    brandkit --show-config                Show current configuration
    brandkit --mcp                        Run as an MCP server (stdio)
    brandkit --version                    Show version
    brandkit --help                       Show this help

Configuration:
    Domain checks use the Namecheap API, which needs four values:

        NAMECHEAP_API_USER    API user
        NAMECHEAP_API_KEY     API key
        NAMECHEAP_USERNAME    Account username
        CLIENT_IP             Whitelisted client IP address

    Set them in the environment, in a .env file in the current directory,
    or run: brandkit --setup

    Optional:
        NAMECHEAP_SANDBOX=1   Use the Namecheap sandbox API
        BRANDKIT_TIMEOUT=30   Registrar request timeout in seconds
        BRANDKIT_DEBUG=1      Verbose logging (includes HTTP requests)

    Enable API access at: https://ap.www.namecheap.com/settings/tools/apiaccess/
""")


def run_setup() -> bool:
    """Interactive setup wizard."""
    import getpass
    from .config import ENV_VARS, get_config_file, get_config_sources, save_config

    print("=" * 50)
    print("BrandKit - Setup")
    print("=" * 50)
    print()

    sources = get_config_sources()
    if all(sources.values()):
        print("All Namecheap credentials are configured.")
        print()
        response = input("Update credentials? [y/N]: ").strip().lower()
        if response != "y":
            print("\nSetup complete. Your current configuration is preserved.")
            return True

    print("Namecheap API credentials")
    print("Enable API access at: https://ap.www.namecheap.com/settings/tools/apiaccess/")
    print("Press Enter to keep a value unchanged")
    print()

    labels = {
        "api_user": "API user",
        "api_key": "API key",
        "username": "Account username",
        "client_ip": "Client IP",
    }
    values = {}
    for field in ENV_VARS:
        prompt = f"{labels[field]}: "
        value = getpass.getpass(prompt) if field == "api_key" else input(prompt)
        if value.strip():
            values[field] = value.strip()

    if values:
        if save_config(values):
            print(f"\n✓ Credentials saved to {get_config_file()}")
        else:
            print("\n✗ Failed to save credentials")
            return False

    return test_credentials()


def show_config():
    """Show current configuration."""
    from .config import ENV_VARS, get_config_file, get_config_sources, load_config, mask_key
    from .errors import ConfigurationError

    print("Configuration")
    print("=" * 50)
    print()

    config_file = get_config_file()
    print(f"Config file: {config_file}")
    print(f"  Exists: {config_file.exists()}")
    print()

    sources = get_config_sources()
    for field, env_var in ENV_VARS.items():
        source = sources[field]
        print(f"{env_var}: {source or 'Not configured'}")

    try:
        config = load_config()
    except ConfigurationError as e:
        print()
        print(f"✗ {e}")
        return

    print()
    print(f"API user:   {config.api_user}")
    print(f"API key:    {mask_key(config.api_key)}")
    print(f"Username:   {config.username}")
    print(f"Client IP:  {config.client_ip}")
    print(f"Sandbox:    {config.sandbox}")
    print(f"Timeout:    {config.timeout}s")


def test_credentials() -> bool:
    """Test the Namecheap credentials with a single domain check."""
    from .config import load_config
    from .errors import ConfigurationError, IntegrationError
    from .namecheap_client import NamecheapClient

    print("\nTesting Namecheap API...")
    try:
        config = load_config()
        with NamecheapClient(config) as client:
            client.check_domains(["example.com"])
    except ConfigurationError as e:
        print(f"✗ {e}")
        return False
    except IntegrationError as e:
        print(f"✗ API test failed: {e}")
        return False

    print("✓ Namecheap API working")
    return True


def run_mcp() -> int:
    """Load configuration and run the MCP server."""
    import sys
    from .config import load_config
    from .errors import ConfigurationError

    try:
        config = load_config()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    from .server import run
    run(config)
    return 0
