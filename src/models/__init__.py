"""
Data models for the application.

This module contains all data models used throughout the application.
"""

from src.models.update import Chat, InlineQuery, Message, Update, UpdateKind, User
from src.models.response import BotResponse, DEFAULT_RESPONSE

__all__ = [
    "Chat",
    "InlineQuery",
    "Message",
    "Update",
    "UpdateKind",
    "User",
    "BotResponse",
    "DEFAULT_RESPONSE",
]
