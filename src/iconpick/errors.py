"""Exception hierarchy for iconpick.

Most picker failures degrade to empty results instead of raising; these
exceptions are used only where a caller asked for strict behavior.
"""


class IconPickError(Exception):
    """Base class for all iconpick errors."""


class StorageError(IconPickError):
    """A persisted store could not be read or decoded."""


class UnknownTabError(IconPickError, ValueError):
    """A tab name does not match any picker tab."""
