"""
Storage modules for ChatSim.

Includes:
- Account directory for users and credentials
- Message ledger for message records and delivery state
"""

from .directory import AccountDirectory, generate_username
from .ledger import MessageLedger

__all__ = [
    'AccountDirectory',
    'generate_username',
    'MessageLedger',
]
