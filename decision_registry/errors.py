"""Exceptions raised by the decision registry."""
from typing import Iterable, List


class RegistryError(Exception):
    """Base class for all registry errors."""


class AlreadyExists(RegistryError):
    """Tag, question identifier or decision is already present."""


class UsesNonExistentTags(RegistryError):
    """A question references tags the registry does not know about."""

    def __init__(self, tags: Iterable[str]):
        self.tags: List[str] = sorted(tags)
        super().__init__(f"Question uses non-existent tags: {', '.join(self.tags)}")


class InvalidUUID(RegistryError, ValueError):
    """An identifier string is not a well-formed UUID."""


class DoesNotExist(RegistryError, LookupError):
    """No admitted question has the given identifier."""
