"""DirectoryProvider protocol — services depend on this, not the concrete implementation."""

from typing import Protocol


class DirectoryLookupError(Exception):
    """The directory could not resolve a contact email for the given code."""


class DirectoryProvider(Protocol):
    async def get_contact_email(self, code_officiel_geographique: str) -> str: ...
