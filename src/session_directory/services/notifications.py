"""Notification delivery for session events."""

import logging
from dataclasses import dataclass
from typing import Protocol

from session_directory.domain.events import CREATED, SessionEvent

_logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Interface for delivering session events to interested parties."""

    def notify(self, event: SessionEvent) -> None:
        """Deliver a single event."""


@dataclass
class LoggingNotifier(Notifier):
    """Notifier that logs what it would send instead of emailing."""

    logger: logging.Logger = _logger

    def notify(self, event: SessionEvent) -> None:
        """Log the mock email and the notify line for an event."""
        if event.kind == CREATED and event.recipient:
            codes = ", ".join(f"{key}: {value}" for key, value in event.details.items())
            self.logger.info("Mock email to %s: %s", event.recipient, codes)
        attendee = event.details.get("attendee")
        self.logger.info(
            'Notify: session "%s" %s%s (id=%s)',
            event.title,
            event.kind.replace("_", " "),
            f" ({attendee})" if attendee else "",
            event.session_id,
        )


def dispatch(notifier: Notifier, events: list[SessionEvent]) -> None:
    """Hand events to a notifier; delivery failures are logged, not raised."""
    for event in events:
        try:
            notifier.notify(event)
        except Exception:
            _logger.exception(
                "Failed to deliver session notification",
                extra={"session_id": str(event.session_id), "kind": event.kind},
            )
