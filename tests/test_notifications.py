"""Tests for session notifications."""

import logging
from uuid import uuid4

from session_directory.domain.events import CREATED, JOINED, SessionEvent
from session_directory.services.notifications import LoggingNotifier, dispatch


class _ExplodingNotifier:
    def notify(self, event: SessionEvent) -> None:
        raise RuntimeError("smtp down")


def test_logging_notifier_logs_mock_email_for_created(caplog) -> None:
    logger = logging.getLogger("tests.notifications")
    notifier = LoggingNotifier(logger=logger)
    event = SessionEvent(
        kind=CREATED,
        session_id=uuid4(),
        title="Book club",
        recipient="org@example.com",
        details={"Management code": "abc123"},
    )

    with caplog.at_level(logging.INFO, logger="tests.notifications"):
        notifier.notify(event)

    messages = [record.getMessage() for record in caplog.records]
    assert "Mock email to org@example.com: Management code: abc123" in messages
    assert any('session "Book club" created' in message for message in messages)


def test_logging_notifier_names_attendee(caplog) -> None:
    logger = logging.getLogger("tests.notifications")
    notifier = LoggingNotifier(logger=logger)
    event = SessionEvent(
        kind=JOINED, session_id=uuid4(), title="Book club", details={"attendee": "Ada"}
    )

    with caplog.at_level(logging.INFO, logger="tests.notifications"):
        notifier.notify(event)

    assert len(caplog.records) == 1
    assert "joined (Ada)" in caplog.records[0].getMessage()


def test_dispatch_swallows_delivery_failures(caplog, monkeypatch) -> None:
    monkeypatch.setattr(logging.getLogger("session_directory"), "propagate", True)
    event = SessionEvent(kind=JOINED, session_id=uuid4(), title="Book club")

    with caplog.at_level(logging.ERROR):
        dispatch(_ExplodingNotifier(), [event])

    assert any(
        "Failed to deliver session notification" in record.getMessage()
        for record in caplog.records
    )
