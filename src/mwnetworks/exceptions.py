"""
Exceptions raised by the ``mwnetworks`` package.

Every exception also derives from the closest built-in exception, so callers can
catch either the package-specific class or the usual ``ValueError``/``KeyError``.
"""


class NetworkParameterError(Exception):
    """Base class for all the errors raised by the package."""


class InvalidArgument(NetworkParameterError, ValueError):
    """Argument outside of its domain (negative magnitude, invalid port, ...)."""


class NotFound(NetworkParameterError, KeyError):
    """No data stored at the exact requested frequency."""

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class EmptyCollection(NetworkParameterError, LookupError):
    """Lookup on a collection without any frequency point."""
