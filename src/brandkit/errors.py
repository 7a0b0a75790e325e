"""
Exception types for BrandKit.

ConfigurationError and IntegrationError propagate to the caller.
ProbeError is raised and contained inside the social username checker.
"""


class BrandKitError(Exception):
    """Base class for BrandKit errors."""


class ConfigurationError(BrandKitError):
    """A required registrar credential is missing or a setting is invalid."""

    def __init__(self, message: str, missing: list[str] | None = None):
        self.missing = list(missing or [])
        super().__init__(message)


class IntegrationError(BrandKitError):
    """The registrar call failed or returned something we can't use."""


class ProbeError(BrandKitError):
    """A single social profile fetch failed."""

    def __init__(self, platform: str, message: str):
        self.platform = platform
        super().__init__(message)


class UnsupportedPlatformWarning(UserWarning):
    """Requested platform is not in the fixed platform table."""
