"""
Custom exceptions for ChatSim.
"""


class ChatSimException(Exception):
    """Base exception for ChatSim errors."""
    pass


class DuplicateAccountError(ChatSimException):
    """An account with the same derived username already exists."""
    pass


class AuthenticationError(ChatSimException):
    """Authentication failed."""
    pass


class PasswordMismatchError(ChatSimException):
    """Password and confirmation differ."""
    pass


class UnknownRecipientError(ChatSimException):
    """Recipient username is not registered."""
    pass


class SelfMessageError(ChatSimException):
    """User tried to message themselves."""
    pass


class InvalidNumericInputError(ChatSimException):
    """Menu choice is not an integer."""
    pass


class InvalidMenuChoiceError(ChatSimException):
    """Menu choice is an integer outside the menu."""
    pass


class InvalidPartyError(ChatSimException):
    """Sender or receiver is missing."""
    pass


class InvalidTransitionError(ChatSimException):
    """Message status change is not a forward step."""
    pass


class SessionStateError(ChatSimException):
    """Command is not allowed in the current login state."""
    pass
