import io
import logging

import pytest

from chatsim.client import ChatConsole, render_history
from chatsim.common.protocol import ConversationHistory, InboxEntry, MessageStatus, OutboxEntry


def run_script(session, lines, clear=False):
    """Run the console against scripted input; returns (exit code, output, prompts)."""
    feed = iter(lines)
    prompts = []

    def scripted_input(prompt):
        prompts.append(prompt)
        try:
            return next(feed)
        except StopIteration:
            raise EOFError

    out = io.StringIO()
    console = ChatConsole(session, input_func=scripted_input, output=out, clear=clear)
    code = console.run()
    return code, out.getvalue(), prompts


def test_register_login_exit(session):
    code, out, _ = run_script(session, [
        "2", "Alice Smith", "01011990", "pw1", "pw1",
        "1", "alice0101", "pw1",
        "9",
        "0",
    ])

    assert code == 0
    assert "Your generated username is: alice0101" in out
    assert "Welcome, Alice Smith!" in out
    assert "Logging out alice0101..." in out
    assert out.rstrip().endswith("Exiting application. Goodbye!")


def test_failed_login_returns_to_menu(session):
    code, out, _ = run_script(session, ["1", "nobody", "pw", "0"])

    assert code == 0
    assert "Login failed. Invalid username or password." in out
    assert out.count("CHAT APPLICATION") == 2


def test_failed_login_keeps_terminal_quiet(session, caplog, capsys):
    caplog.set_level(logging.WARNING)

    run_script(session, ["1", "nobody", "pw", "0"])

    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert capsys.readouterr().err == ""


def test_password_mismatch_and_duplicate(session):
    _, out, _ = run_script(session, [
        "2", "Alice Smith", "01011990", "a", "b",
        "2", "Alice Smith", "01011990", "a", "a",
        "2", "alice w", "01012000", "c", "c",
        "0",
    ])

    assert "Passwords do not match." in out
    assert out.count("Registration successful!") == 1
    assert "An account with similar details already exists." in out


def test_non_numeric_choice_reprompts(session):
    code, out, prompts = run_script(session, ["abc", "", "7", "0"])

    assert code == 0
    assert prompts[:3] == [
        "Enter choice: ",
        "Invalid input. Please enter a valid number: ",
        "Invalid input. Please enter a valid number: ",
    ]
    assert "Invalid choice. Please enter 1, 2, or 0." in out


def test_full_conversation(session):
    _, out, _ = run_script(session, [
        "2", "Alice Smith", "01011990", "pw", "pw",
        "2", "Bob Jones", "02021991", "pw", "pw",
        "1", "alice0101", "pw",
        "1", "bob0202", "hello bob",
        "1", "alice0101",
        "1", "ghost",
        "5",
        "9",
        "1", "bob0202", "pw",
        "2",
        "9",
        "1", "alice0101", "pw",
        "2",
        "9",
        "0",
    ])

    assert "Message sent to bob0202 and is pending delivery." in out
    assert "You cannot send a message to yourself." in out
    assert "User 'ghost' not found." in out
    assert "Invalid choice. Please try again." in out
    assert "From: alice0101 | Message: hello bob" in out
    assert "To: bob0202 | Status: (Seen) | Message: hello bob" in out


def test_logged_in_menu_ignores_exit_choice(session):
    _, out, _ = run_script(session, [
        "2", "Alice Smith", "01011990", "pw", "pw",
        "1", "alice0101", "pw",
        "0",
    ])

    assert "Invalid choice. Please try again." in out
    assert "Exiting application. Goodbye!" in out


def test_eof_exits_cleanly(session):
    code, out, _ = run_script(session, [])

    assert code == 0
    assert "Exiting application. Goodbye!" in out


def test_render_history_empty():
    text = render_history(ConversationHistory(username="alice0101"))

    assert "--- Full Conversation History for alice0101 ---" in text
    assert "Outbox is empty." in text
    assert "Inbox is empty." in text


def test_render_history_orders_and_labels():
    history = ConversationHistory(
        username="alice0101",
        outbox=[
            OutboxEntry(message_id=2, receiver="carol0303", content="two", status=MessageStatus.DELIVERED),
            OutboxEntry(message_id=1, receiver="bob0202", content="one", status=MessageStatus.SENT),
        ],
        inbox=[InboxEntry(message_id=3, sender="bob0202", content="reply")],
    )

    text = render_history(history)

    assert text.index("To: carol0303") < text.index("To: bob0202")
    assert "Status: (Delivered)" in text
    assert "Status: (Sent)" in text
    assert "From: bob0202 | Message: reply" in text
    assert "Status" not in text.split("Inbox")[1]


@pytest.mark.parametrize("value, expected", [("true", True), ("0", False), ("Yes", True)])
def test_clear_screen_flag_from_env(session, monkeypatch, value, expected):
    monkeypatch.setenv("CHATSIM_CLEAR_SCREEN", value)

    console = ChatConsole(session, input_func=lambda p: "0", output=io.StringIO())

    assert console.clear is expected


def test_screen_cleared_once_per_logout(session, monkeypatch):
    calls = []
    monkeypatch.setattr("chatsim.client.clear_screen", lambda: calls.append(1))

    run_script(session, [
        "2", "Alice Smith", "01011990", "pw", "pw",
        "5",
        "1", "alice0101", "pw",
        "7",
        "9",
        "1", "alice0101", "pw",
        "9",
        "0",
    ], clear=True)

    assert len(calls) == 2


def test_screen_not_cleared_without_logout(session, monkeypatch):
    calls = []
    monkeypatch.setattr("chatsim.client.clear_screen", lambda: calls.append(1))

    run_script(session, ["4", "abc", "0"], clear=True)

    assert calls == []
