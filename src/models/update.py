"""
Telegram update models.

This module contains immutable models for the update envelope delivered by the
Telegram webhook. Only the fields the dispatcher and the bundled commands read
are modelled; the full payload stays available through ``Update.raw``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class UpdateKind(str, Enum):
    """Kind of an incoming update, in classification priority order."""
    MESSAGE = "message"
    INLINE_QUERY = "inline_query"
    UNHANDLED = "unhandled"


@dataclass(frozen=True)
class User:
    """Model for a Telegram user."""
    id: int
    username: Optional[str] = None
    first_name: Optional[str] = None
    is_bot: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=int(data.get("id", 0)),
            username=data.get("username"),
            first_name=data.get("first_name"),
            is_bot=bool(data.get("is_bot", False)),
        )


@dataclass(frozen=True)
class Chat:
    """Model for a Telegram chat."""
    id: int
    type: Optional[str] = None
    title: Optional[str] = None
    username: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chat":
        return cls(
            id=int(data.get("id", 0)),
            type=data.get("type"),
            title=data.get("title"),
            username=data.get("username"),
        )


@dataclass(frozen=True)
class Message:
    """Model for a Telegram message."""
    message_id: int
    chat: Chat
    from_user: Optional[User] = None
    text: Optional[str] = None
    new_chat_members: Tuple[User, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        """
        Build a message from its webhook JSON.

        Args:
            data: The ``message`` object of the update

        Returns:
            Message instance; ``text`` is None unless the payload holds a string
        """
        sender = data.get("from")
        text = data.get("text")
        members = data.get("new_chat_members") or []
        return cls(
            message_id=int(data.get("message_id", 0)),
            chat=Chat.from_dict(data.get("chat") or {}),
            from_user=User.from_dict(sender) if isinstance(sender, dict) else None,
            text=text if isinstance(text, str) else None,
            new_chat_members=tuple(User.from_dict(m) for m in members if isinstance(m, dict)),
        )


@dataclass(frozen=True)
class InlineQuery:
    """Model for a Telegram inline query."""
    id: str
    from_user: Optional[User] = None
    query: str = ""
    offset: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InlineQuery":
        sender = data.get("from")
        query = data.get("query")
        return cls(
            id=str(data.get("id", "")),
            from_user=User.from_dict(sender) if isinstance(sender, dict) else None,
            query=query if isinstance(query, str) else "",
            offset=str(data.get("offset", "")),
        )


@dataclass(frozen=True)
class Update:
    """
    Model for one update delivered by the webhook.

    At most one of ``message`` and ``inline_query`` is populated by Telegram.
    An update carrying neither is not handled by the dispatcher.
    """
    update_id: int
    message: Optional[Message] = None
    inline_query: Optional[InlineQuery] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Update":
        """
        Build an update from the decoded webhook body.

        Args:
            data: Decoded JSON body of the webhook request

        Returns:
            Update instance

        Raises:
            ValueError: If the payload is not a JSON object
        """
        if not isinstance(data, dict):
            raise ValueError(f"Update payload must be an object, got {type(data).__name__}")

        message = data.get("message")
        inline_query = data.get("inline_query")
        return cls(
            update_id=int(data.get("update_id", 0)),
            message=Message.from_dict(message) if isinstance(message, dict) else None,
            inline_query=InlineQuery.from_dict(inline_query) if isinstance(inline_query, dict) else None,
            raw=data,
        )

    @property
    def kind(self) -> UpdateKind:
        """Kind of this update; the message variant wins over the inline query."""
        if self.message is not None:
            return UpdateKind.MESSAGE
        if self.inline_query is not None:
            return UpdateKind.INLINE_QUERY
        return UpdateKind.UNHANDLED
