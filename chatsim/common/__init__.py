"""
Common utilities and protocol definitions for ChatSim.
"""

from .protocol import *
from .utils import configure_logging, env_flag, parse_choice, clear_screen
from .exceptions import *

__all__ = [
    'configure_logging',
    'env_flag',
    'parse_choice',
    'clear_screen',
]
