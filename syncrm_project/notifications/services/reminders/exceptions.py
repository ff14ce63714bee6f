class ReminderError(Exception):
    """Base class for reminder engine errors."""


class DispatchFailure(ReminderError):
    """The notification channel did not accept the message."""


class LedgerConflict(ReminderError):
    """A ledger row already exists for the dedupe key."""

    def __init__(self, dedupe_key):
        super().__init__(f"Reminder already recorded for {dedupe_key!r}")
        self.dedupe_key = dedupe_key
