"""
ChatSim Application

A console-based, in-memory chat simulator implementing:
- Account registration with derived usernames
- Plaintext credential login
- Message delivery tracking (Sent -> Delivered -> Seen)
- Read receipts when a user views their inbox
"""

__version__ = "1.0.0"
