"""
ChatSim Session

Request/response core of the application. A session holds the currently
logged-in user and processes one command per turn:
1. Login / Register while logged out
2. Send / History / Logout while logged in
3. Exit at any time

Errors are raised as ChatSimException subclasses for the caller to report.
"""

import logging
from typing import Optional

from chatsim.common.exceptions import (
    AuthenticationError, PasswordMismatchError, SelfMessageError,
    SessionStateError, UnknownRecipientError,
)
from chatsim.common.protocol import (
    Command, ExitCommand, ExitResponse, HistoryCommand, HistoryResponse,
    LoginCommand, LoginResponse, LogoutCommand, LogoutResponse,
    RegisterCommand, RegisterResponse, Response, SendCommand, SendResponse, User,
)
from chatsim.storage import AccountDirectory, MessageLedger

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, directory: AccountDirectory, ledger: MessageLedger):
        self.directory = directory
        self.ledger = ledger
        self.current_user: Optional[User] = None

    @property
    def logged_in(self) -> bool:
        return self.current_user is not None

    def handle(self, command: Command) -> Response:
        """
        Process a single command.

        Args:
            command: Any command model from chatsim.common.protocol

        Returns:
            The matching response model

        Raises:
            ChatSimException: On any rejected command
        """
        handler = getattr(self, f"_handle_{command.type}")
        return handler(command)

    def check_recipient(self, username: str) -> User:
        """
        Validate a recipient for the current user.

        Returns:
            The recipient

        Raises:
            UnknownRecipientError: If no such user exists
            SelfMessageError: If the recipient is the current user
        """
        self._require_login()
        receiver = self.directory.find(username)
        if receiver is None:
            raise UnknownRecipientError(f"User '{username}' not found.")
        if receiver.username == self.current_user.username:
            raise SelfMessageError("You cannot send a message to yourself.")
        return receiver

    def _require_login(self):
        if not self.logged_in:
            raise SessionStateError("You must be logged in to do that.")

    def _require_logout(self):
        if self.logged_in:
            raise SessionStateError("Log out first.")

    def _handle_login(self, cmd: LoginCommand) -> LoginResponse:
        self._require_logout()
        user = self.directory.authenticate(cmd.username, cmd.password)
        if user is None:
            raise AuthenticationError("Login failed. Invalid username or password.")

        self.current_user = user
        return LoginResponse(username=user.username, full_name=user.full_name)

    def _handle_register(self, cmd: RegisterCommand) -> RegisterResponse:
        self._require_logout()
        if cmd.password != cmd.confirm_password:
            raise PasswordMismatchError("Passwords do not match.")

        username = self.directory.register(cmd.full_name, cmd.dob, cmd.password)
        return RegisterResponse(username=username)

    def _handle_send(self, cmd: SendCommand) -> SendResponse:
        receiver = self.check_recipient(cmd.recipient)
        msg = self.ledger.send(self.current_user, receiver, cmd.text)
        return SendResponse(message_id=msg.id, recipient=receiver.username, status=msg.status)

    def _handle_history(self, cmd: HistoryCommand) -> HistoryResponse:
        self._require_login()
        return HistoryResponse(history=self.ledger.view_history(self.current_user))

    def _handle_logout(self, cmd: LogoutCommand) -> LogoutResponse:
        self._require_login()
        username = self.current_user.username
        self.current_user = None
        logger.info("User %r logged out", username)
        return LogoutResponse(username=username)

    def _handle_exit(self, cmd: ExitCommand) -> ExitResponse:
        self.current_user = None
        return ExitResponse()
