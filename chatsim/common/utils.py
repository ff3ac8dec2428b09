"""
Utility functions for ChatSim.
"""

import logging
import os
import re
import sys

from chatsim.common.exceptions import InvalidNumericInputError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CHOICE_PATTERN = re.compile(r"[+-]?[0-9]+")


def configure_logging(level: str = "WARNING"):
    """
    Configure root logging on stderr, away from the menu on stdout.

    Args:
        level: Level name such as "DEBUG" or "INFO"; unknown names fall back to WARNING
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def env_flag(name: str, default: bool) -> bool:
    """Read a true/false environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def parse_choice(raw: str) -> int:
    """
    Parse a menu choice.

    Args:
        raw: One line of user input

    Returns:
        The integer choice

    Raises:
        InvalidNumericInputError: If the line is not an integer
    """
    stripped = raw.strip()
    if not CHOICE_PATTERN.fullmatch(stripped):
        raise InvalidNumericInputError("Invalid input. Please enter a valid number: ")
    return int(stripped)


def clear_screen():
    """Clear the terminal."""
    os.system('cls' if os.name == 'nt' else 'clear')
