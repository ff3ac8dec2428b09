"""
Data model and session protocol definitions using Pydantic.

Users and messages live in the storage layer; commands and responses are
the units exchanged between the console and the session, one per turn.
"""

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from chatsim.common.exceptions import InvalidTransitionError


class MessageStatus(str, Enum):
    """Delivery status of a message. Declaration order is the only legal order."""
    SENT = "Sent"
    DELIVERED = "Delivered"
    SEEN = "Seen"

    @property
    def rank(self) -> int:
        return list(MessageStatus).index(self)


class User(BaseModel):
    """Registered account. Inbox and outbox hold message ids, newest first."""
    full_name: str
    date_of_birth: str
    username: str
    password: str = Field(..., description="Plaintext password")
    inbox: List[int] = Field(default_factory=list)
    outbox: List[int] = Field(default_factory=list)


class Message(BaseModel):
    """A single message record, owned by the ledger."""
    id: int
    sender: str
    receiver: str
    content: str
    status: MessageStatus = MessageStatus.SENT

    def advance(self, target: MessageStatus):
        """
        Move the status one step forward to `target`.

        Raises:
            InvalidTransitionError: If `target` is not the next status
        """
        if target.rank != self.status.rank + 1:
            raise InvalidTransitionError(
                f"Message {self.id} cannot go from {self.status.value} to {target.value}"
            )
        self.status = target


class OutboxEntry(BaseModel):
    message_id: int
    receiver: str
    content: str
    status: MessageStatus


class InboxEntry(BaseModel):
    message_id: int
    sender: str
    content: str


class ConversationHistory(BaseModel):
    """Snapshot of one user's outbox and inbox, newest first."""
    username: str
    outbox: List[OutboxEntry] = Field(default_factory=list)
    inbox: List[InboxEntry] = Field(default_factory=list)


# Commands (console -> session)

class LoginCommand(BaseModel):
    type: Literal["login"] = "login"
    username: str
    password: str


class RegisterCommand(BaseModel):
    type: Literal["register"] = "register"
    full_name: str
    dob: str = Field(..., description="Date of birth, DDMMYYYY")
    password: str
    confirm_password: str


class SendCommand(BaseModel):
    type: Literal["send"] = "send"
    recipient: str
    text: str


class HistoryCommand(BaseModel):
    type: Literal["history"] = "history"


class LogoutCommand(BaseModel):
    type: Literal["logout"] = "logout"


class ExitCommand(BaseModel):
    type: Literal["exit"] = "exit"


Command = Union[
    LoginCommand, RegisterCommand, SendCommand,
    HistoryCommand, LogoutCommand, ExitCommand,
]


# Responses (session -> console)

class LoginResponse(BaseModel):
    type: Literal["login"] = "login"
    username: str
    full_name: str


class RegisterResponse(BaseModel):
    type: Literal["register"] = "register"
    username: str


class SendResponse(BaseModel):
    type: Literal["send"] = "send"
    message_id: int
    recipient: str
    status: MessageStatus


class HistoryResponse(BaseModel):
    type: Literal["history"] = "history"
    history: ConversationHistory


class LogoutResponse(BaseModel):
    type: Literal["logout"] = "logout"
    username: str


class ExitResponse(BaseModel):
    type: Literal["exit"] = "exit"


Response = Union[
    LoginResponse, RegisterResponse, SendResponse,
    HistoryResponse, LogoutResponse, ExitResponse,
]


# Test function
if __name__ == "__main__":
    print("[*] Testing protocol models")

    msg = Message(id=1, sender="alice0101", receiver="bob0202", content="hi")
    msg.advance(MessageStatus.DELIVERED)
    print(f"\n[1] Message:")
    print(f"    {msg.model_dump_json(indent=2)}")

    try:
        msg.advance(MessageStatus.SENT)
    except InvalidTransitionError as e:
        print(f"\n[2] Backward transition rejected: {e}")

    cmd = SendCommand(recipient="bob0202", text="hello")
    print(f"\n[3] SendCommand:")
    print(f"    {cmd.model_dump_json()}")

    print("\n[✓] Protocol model test passed!")
