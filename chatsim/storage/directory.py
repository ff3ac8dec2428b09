"""
Account Directory for ChatSim Users

Keeps registered users in memory, in registration order.
Passwords are stored and compared as plaintext.
"""

import logging
from typing import Dict, Iterator, Optional

from chatsim.common.exceptions import DuplicateAccountError
from chatsim.common.protocol import User

logger = logging.getLogger(__name__)


def generate_username(full_name: str, dob: str) -> str:
    """
    Derive a username from a full name and date of birth.

    Username = lower(first word of full_name) + dob[0:4]

    Args:
        full_name: User's full name
        dob: Date of birth string (DDMMYYYY)

    Returns:
        Derived username
    """
    first_name = full_name.lower().split(' ', 1)[0]
    return first_name + dob[:4]


class AccountDirectory:
    """
    Authoritative store of all user accounts.
    """

    def __init__(self):
        # dicts preserve insertion order, so iteration follows registration order
        self._users: Dict[str, User] = {}

    def register(self, full_name: str, dob: str, password: str) -> str:
        """
        Register a new user under a derived username.

        Args:
            full_name: User's full name
            dob: Date of birth (DDMMYYYY)
            password: Plaintext password

        Returns:
            The generated username

        Raises:
            DuplicateAccountError: If the derived username is taken
        """
        username = generate_username(full_name, dob)
        if username in self._users:
            logger.info("Registration collision for username %r", username)
            raise DuplicateAccountError("An account with similar details already exists.")

        self._users[username] = User(
            full_name=full_name,
            date_of_birth=dob,
            username=username,
            password=password,
        )
        logger.info("Registered user %r", username)
        return username

    def find(self, username: str) -> Optional[User]:
        """Exact-match lookup."""
        return self._users.get(username)

    def exists(self, username: str) -> bool:
        return username in self._users

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Verify credentials.

        Returns:
            The user if the username exists and the password matches, None otherwise
        """
        user = self.find(username)
        if user is not None and user.password == password:
            logger.info("User %r authenticated", username)
            return user

        logger.info("Authentication failed for %r", username)
        return None

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> Iterator[User]:
        return iter(self._users.values())
