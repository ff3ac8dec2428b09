import pytest

from chatsim.session import Session
from chatsim.storage import AccountDirectory, MessageLedger


@pytest.fixture
def directory():
    return AccountDirectory()


@pytest.fixture
def ledger(directory):
    return MessageLedger(directory)


@pytest.fixture
def session(directory, ledger):
    return Session(directory, ledger)


@pytest.fixture
def users(directory):
    """Three registered users: alice0101, bob0202, carol0303."""
    directory.register("Alice Smith", "01011990", "pw1")
    directory.register("Bob Jones", "02021991", "pw2")
    directory.register("Carol", "03031992", "pw3")
    return (
        directory.find("alice0101"),
        directory.find("bob0202"),
        directory.find("carol0303"),
    )
