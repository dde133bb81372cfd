"""
Echo suppression for host video actions.

When the host broadcasts a playback action the server reflects it back to
every member, the host included. Inbound actions are ignored for a short
window after each outbound one so the host's player is not driven twice.
The window is a deadline against an injectable clock, so it expires on its
own regardless of whether an echo ever arrives.
"""

import time
from typing import Callable

from config.settings import ECHO_SUPPRESSION_SECONDS

class EchoSuppressor:
    """Time-window flag set on outbound actions and read on inbound ones."""

    def __init__(self, window: float = ECHO_SUPPRESSION_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.window = window
        self.clock = clock
        self._suppress_until = float('-inf')

    def mark_outbound_sent(self) -> None:
        """Open (or re-open) the suppression window."""
        self._suppress_until = self.clock() + self.window

    def should_apply_inbound_action(self) -> bool:
        """True once the window opened by the last outbound action has elapsed."""
        return self.clock() >= self._suppress_until

    @property
    def is_suppressing(self) -> bool:
        return not self.should_apply_inbound_action()

    def reset(self) -> None:
        self._suppress_until = float('-inf')
