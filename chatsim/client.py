#!/usr/bin/env python3
"""
ChatSim Console

Interactive menu over stdin/stdout. Reads input, builds protocol commands,
hands them to the session and prints the responses.
"""

import os
import sys
from typing import Callable, Optional, TextIO

from dotenv import load_dotenv

from chatsim.common.exceptions import (
    ChatSimException, InvalidMenuChoiceError, InvalidNumericInputError,
)
from chatsim.common.protocol import (
    ConversationHistory, ExitCommand, HistoryCommand, LoginCommand,
    LogoutCommand, RegisterCommand, SendCommand,
)
from chatsim.common.utils import clear_screen, configure_logging, env_flag, parse_choice
from chatsim.session import Session
from chatsim.storage import AccountDirectory, MessageLedger

load_dotenv()

MAIN_MENU = (
    "\n========= CHAT APPLICATION =========\n"
    "1. Login\n"
    "2. Register New Account\n"
    "0. Exit\n"
    "===================================="
)


def logged_in_menu(username: str) -> str:
    return (
        f"\n--- Logged in as {username} ---\n"
        "1. Send a Message\n"
        "2. View Conversation History\n"
        "9. Logout"
    )


def render_history(history: ConversationHistory) -> str:
    """Format a conversation history for the terminal."""
    lines = [f"\n--- Full Conversation History for {history.username} ---"]

    lines.append("\n--- Messages You Sent (Outbox) ---")
    if not history.outbox:
        lines.append("Outbox is empty.")
    for entry in history.outbox:
        lines.append(
            f"To: {entry.receiver} | Status: ({entry.status.value}) | Message: {entry.content}"
        )

    lines.append("\n--- Messages You Received (Inbox) ---")
    if not history.inbox:
        lines.append("Inbox is empty.")
    for entry in history.inbox:
        lines.append(f"From: {entry.sender} | Message: {entry.content}")

    lines.append("\n---------------------------------------------")
    return "\n".join(lines)


class ChatConsole:
    def __init__(
        self,
        session: Session,
        input_func: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
        clear: Optional[bool] = None,
    ):
        self.session = session
        self.input_func = input_func
        self.output = output or sys.stdout
        if clear is None:
            clear = env_flag('CHATSIM_CLEAR_SCREEN', True)
        self.clear = clear

    def say(self, text: str = ""):
        print(text, file=self.output)

    def ask(self, prompt: str) -> str:
        return self.input_func(prompt)

    def read_choice(self) -> int:
        """Prompt until the user enters an integer."""
        prompt = "Enter choice: "
        while True:
            try:
                return parse_choice(self.ask(prompt))
            except InvalidNumericInputError as e:
                prompt = str(e)

    def run(self) -> int:
        """
        Run the menu loop until the user exits or input ends.

        Returns:
            Process exit code
        """
        try:
            while True:
                try:
                    if self.session.logged_in:
                        self.say(logged_in_menu(self.session.current_user.username))
                        self.logged_in_choice(self.read_choice())
                    else:
                        self.say(MAIN_MENU)
                        if not self.main_choice(self.read_choice()):
                            break
                except ChatSimException as e:
                    self.say(f"\nError: {e}")
        except (EOFError, KeyboardInterrupt):
            self.session.handle(ExitCommand())

        self.say("\nExiting application. Goodbye!")
        return 0

    def main_choice(self, choice: int) -> bool:
        """Handle a choice from the logged-out menu. Returns False on exit."""
        if choice == 1:
            self.login()
        elif choice == 2:
            self.register()
        elif choice == 0:
            self.session.handle(ExitCommand())
            return False
        else:
            raise InvalidMenuChoiceError("Invalid choice. Please enter 1, 2, or 0.")
        return True

    def logged_in_choice(self, choice: int):
        if choice == 1:
            self.send_message()
        elif choice == 2:
            response = self.session.handle(HistoryCommand())
            self.say(render_history(response.history))
        elif choice == 9:
            response = self.session.handle(LogoutCommand())
            self.say(f"\nLogging out {response.username}...")
            if self.clear:
                clear_screen()
        else:
            raise InvalidMenuChoiceError("Invalid choice. Please try again.")

    def login(self):
        username = self.ask("Enter username: ")
        password = self.ask("Enter password: ")
        response = self.session.handle(LoginCommand(username=username, password=password))
        self.say(f"\nWelcome, {response.full_name}!")

    def register(self):
        full_name = self.ask("Enter your full name: ")
        dob = self.ask("Enter your date of birth (DDMMYYYY): ")
        password = self.ask("Set a password: ")
        confirm_password = self.ask("Confirm your password: ")

        response = self.session.handle(RegisterCommand(
            full_name=full_name,
            dob=dob,
            password=password,
            confirm_password=confirm_password,
        ))
        self.say("\n✅ Registration successful!")
        self.say(f"Your generated username is: {response.username}")
        self.say("Please use this username to log in.")

    def send_message(self):
        recipient = self.ask("Enter recipient's username: ")
        self.session.check_recipient(recipient)
        text = self.ask("Enter your message: ")

        response = self.session.handle(SendCommand(recipient=recipient, text=text))
        self.say(f"\nMessage sent to {response.recipient} and is pending delivery.")


def main() -> int:
    configure_logging(os.getenv('CHATSIM_LOG_LEVEL', 'WARNING'))

    directory = AccountDirectory()
    ledger = MessageLedger(directory)
    console = ChatConsole(Session(directory, ledger))
    return console.run()


if __name__ == "__main__":
    sys.exit(main())
