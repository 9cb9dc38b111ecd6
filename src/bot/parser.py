"""
Command parsing utilities.

This module handles tokenizing message and inline query text into a command
name and its positional arguments. There is no quoting or escaping.
"""

from typing import List, Optional, Tuple


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split text into whitespace separated tokens.

    Args:
        text: Raw message or inline query text

    Returns:
        Non-empty tokens in order, or [] for empty/blank text

    Examples:
        >>> tokenize("  /start   a b ")
        ['/start', 'a', 'b']
        >>> tokenize("")
        []
    """
    if not text:
        return []
    return text.split()


def get_command(tokens: List[str]) -> Optional[str]:
    """
    Extract the command name from the first token.

    The ``@botname`` qualifier and a leading ``/`` are removed, so registry keys
    are bare names such as ``start``.

    Examples:
        >>> get_command(["/ping@mybot", "hello"])
        'ping'
        >>> get_command(["inline"])
        'inline'
        >>> get_command([]) is None
        True
    """
    if not tokens:
        return None
    name = tokens[0].split("@")[0]
    if name.startswith("/"):
        name = name[1:]
    return name


def parse_command(message_text: Optional[str]) -> Tuple[Optional[str], List[str]]:
    """
    Parse command from message text.

    Args:
        message_text: Message text from Telegram

    Returns:
        Tuple of (command, args); command is None when the text has no tokens

    Examples:
        >>> parse_command("/start arg1 arg2")
        ('start', ['arg1', 'arg2'])
        >>> parse_command("hello")
        ('hello', [])
        >>> parse_command("   ")
        (None, [])
    """
    tokens = tokenize(message_text)
    return get_command(tokens), tokens[1:]
