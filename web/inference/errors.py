from __future__ import annotations

from typing import Optional


class ForwardError(Exception):
    """
    The inference call failed: non-2xx status, transport error or timeout.

    `status` is the HTTP status when the server answered, else None.
    """

    def __init__(self, description: str, status: Optional[int] = None) -> None:
        super().__init__(description)
        self.description = description
        self.status = status

    def __str__(self) -> str:
        if self.status is None:
            return self.description
        return f"{self.description} (status {self.status})"
