"""Exception types shared by the loader, registry, and feedback store."""

from __future__ import annotations


class FormsError(Exception):
    """Base class for every failure the shell reports to the user."""


class FetchError(FormsError):
    """A form descriptor could not be fetched (bad status, not JSON, unreachable)."""


class ParseError(FormsError, ValueError):
    """Imported text is not valid JSON."""


class ValidationError(FormsError, ValueError):
    """A form descriptor is missing required keys or has malformed fields."""


class NotFoundError(FormsError, LookupError):
    """No form is registered under the requested id."""


class StorageError(FormsError, OSError):
    """Reading or writing the persisted feedback slot failed."""
