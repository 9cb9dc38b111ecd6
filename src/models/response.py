"""
Dispatch response model.

This module contains the response returned by the dispatcher and by the Bot API
client, plus the shared default response used when nothing produced output.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BotResponse:
    """
    Model for the outcome of one dispatch or one Bot API call.

    A response is truthy only when it carries an API result in ``body``.
    """
    status_code: int = 200
    body: Optional[Dict[str, Any]] = None

    def __bool__(self) -> bool:
        return self.body is not None

    @property
    def is_default(self) -> bool:
        return self.body is None

    @property
    def ok(self) -> bool:
        """True if Telegram reported success for the call."""
        return bool(self.body and self.body.get("ok"))

    def to_dict(self) -> Dict[str, Any]:
        return {"status_code": self.status_code, "body": self.body}


# Shared no-op response; never mutated.
DEFAULT_RESPONSE = BotResponse()
