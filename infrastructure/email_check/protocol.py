"""EmailCheckProvider protocol — services depend on this, not the concrete implementation."""

from typing import Protocol


class EmailCheckProvider(Protocol):
    async def is_email_safe_to_send_transactional(self, email: str) -> bool: ...
