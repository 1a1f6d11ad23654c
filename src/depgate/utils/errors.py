"""Custom exception classes for depgate."""


class DepGateError(Exception):
    """Base exception for all depgate errors."""
    pass


class ConfigError(DepGateError):
    """Raised when run configuration is invalid or missing."""
    pass


class CommitSourceError(DepGateError):
    """Raised when commit metadata cannot be retrieved from the source-control host."""
    pass


class ManifestReadError(DepGateError):
    """Raised when a manifest file cannot be read from the workspace."""
    pass


class ManifestParseError(DepGateError):
    """Raised when manifest content is not a valid dependency document."""
    pass


class PolicyError(DepGateError):
    """Base class for remote policy document failures."""
    pass


class PolicyFetchError(PolicyError):
    """Raised when the policy document cannot be retrieved."""
    pass


class PolicyParseError(PolicyError):
    """Raised when the policy document is not a flat name-to-version mapping."""
    pass
