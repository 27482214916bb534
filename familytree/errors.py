"""Error taxonomy shared by the engine, the API and the CLI."""

from __future__ import annotations


class FamilyTreeError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(FamilyTreeError):
    """A node, anchor or family does not exist in the caller's family scope."""


class ValidationError(FamilyTreeError):
    """Missing or malformed input (attributes, relation type, import units)."""


class ForbiddenError(FamilyTreeError):
    """The requester is not a member of the target family."""


class PersistenceError(FamilyTreeError):
    """The underlying store transaction failed and was rolled back."""
