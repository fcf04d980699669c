"""EmailProvider protocol — services depend on this, not the concrete implementation."""

from typing import Any, Mapping, Protocol, Sequence


class EmailProvider(Protocol):
    async def send_mail(
        self,
        to: Sequence[str],
        subject: str,
        template: str,
        params: Mapping[str, Any],
    ) -> bool: ...
