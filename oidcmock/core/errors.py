"""Exception types raised by the mock."""


class MockError(Exception):
    """Base class for all failures reported by the mock."""


class ConfigurationError(MockError, ValueError):
    """Invalid mock or token configuration."""


class KeyGenerationError(MockError):
    """The signing key could not be generated; the instance is unusable."""


class SigningError(MockError):
    """A single token could not be signed."""


class ServerError(MockError):
    """The HTTP server could not be started or stopped."""
