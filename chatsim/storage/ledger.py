"""
Message Ledger

Sole owner of message records, keyed by id. Users' inboxes and outboxes
only hold ids, so the sender's and receiver's views always agree on status.

Lifecycle of a message:
    send()                -> Sent, queued, front of sender's outbox
    process_deliveries()  -> Delivered, front of receiver's inbox
    view_history(receiver)-> Seen
"""

import logging
from collections import deque
from itertools import count
from typing import Deque, Dict, Optional

from chatsim.common.exceptions import InvalidPartyError
from chatsim.common.protocol import (
    ConversationHistory, InboxEntry, Message, MessageStatus, OutboxEntry, User,
)
from chatsim.storage.directory import AccountDirectory

logger = logging.getLogger(__name__)


class MessageLedger:
    """
    Authoritative store of all message records plus the delivery queue.
    """

    def __init__(self, directory: AccountDirectory):
        """
        Initialize the ledger.

        Args:
            directory: Directory used to resolve receivers at delivery time
        """
        self.directory = directory
        self._messages: Dict[int, Message] = {}
        self._queue: Deque[int] = deque()
        self._ids = count(1)

    def send(self, sender: Optional[User], receiver: Optional[User], text: str) -> Message:
        """
        Create a message and queue it for delivery.

        Self-sends are not checked here; the session rejects them.

        Args:
            sender: Sending user
            receiver: Receiving user
            text: Message content

        Returns:
            The new message, status Sent

        Raises:
            InvalidPartyError: If sender or receiver is missing
        """
        if sender is None or receiver is None:
            raise InvalidPartyError("Both sender and receiver are required.")

        msg = Message(
            id=next(self._ids),
            sender=sender.username,
            receiver=receiver.username,
            content=text,
        )
        self._messages[msg.id] = msg
        self._queue.append(msg.id)
        sender.outbox.insert(0, msg.id)

        logger.info("Queued message %d from %r to %r", msg.id, msg.sender, msg.receiver)
        return msg

    def process_deliveries(self) -> int:
        """
        Drain the delivery queue in FIFO order.

        The receiver is looked up again by username for every message;
        messages whose receiver no longer resolves are dropped.

        Returns:
            Number of messages delivered
        """
        delivered = 0
        while self._queue:
            msg = self._messages[self._queue.popleft()]
            receiver = self.directory.find(msg.receiver)
            if receiver is None:
                logger.debug("Dropping message %d: receiver %r not found", msg.id, msg.receiver)
                continue

            msg.advance(MessageStatus.DELIVERED)
            receiver.inbox.insert(0, msg.id)
            delivered += 1

        if delivered:
            logger.info("Delivered %d message(s)", delivered)
        return delivered

    def view_history(self, user: User) -> ConversationHistory:
        """
        Deliver pending messages, mark the user's delivered inbox as seen,
        and return both views newest first.

        Args:
            user: User whose history is viewed

        Returns:
            ConversationHistory snapshot
        """
        self.process_deliveries()

        for message_id in user.inbox:
            msg = self._messages[message_id]
            if msg.status is MessageStatus.DELIVERED:
                msg.advance(MessageStatus.SEEN)

        outbox = [
            OutboxEntry(message_id=m.id, receiver=m.receiver, content=m.content, status=m.status)
            for m in map(self.get, user.outbox)
        ]
        inbox = [
            InboxEntry(message_id=m.id, sender=m.sender, content=m.content)
            for m in map(self.get, user.inbox)
        ]
        return ConversationHistory(username=user.username, outbox=outbox, inbox=inbox)

    def get(self, message_id: int) -> Message:
        """Return the message record for `message_id` (KeyError if unknown)."""
        return self._messages[message_id]

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    def __len__(self) -> int:
        return len(self._messages)
