class MoontideError(Exception):
    """Base exception for moontide errors."""


class ConfigError(MoontideError):
    """Raised for invalid configuration values."""


class CatalogError(MoontideError):
    """Raised for invalid reference point catalog operations."""


class UnknownReferencePointError(CatalogError, KeyError):
    """Raised when a reference point key is not in the catalog."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class InvalidCoordinateError(MoontideError, ValueError):
    """Raised for latitude/longitude values outside their valid range."""
