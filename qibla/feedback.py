from __future__ import annotations

from typing import Optional

from .constants import FEEDBACK_COOLDOWN_MS


class FeedbackDebouncer:
    """Gates the "aligned" cue to at most one firing per cooldown window.

    Dropping out of alignment does not clear the cooldown, so wobbling across
    the threshold cannot retrigger the cue early.
    """

    def __init__(
        self, cooldown_ms: float = FEEDBACK_COOLDOWN_MS, *, inclusive: bool = False
    ) -> None:
        if cooldown_ms < 0:
            raise ValueError("cooldown_ms must be non-negative")
        self.cooldown_ms = float(cooldown_ms)
        self.inclusive = inclusive
        self._last_fired_ms: Optional[float] = None

    @property
    def last_fired_ms(self) -> Optional[float]:
        return self._last_fired_ms

    def should_fire(self, is_aligned: bool, now_ms: float) -> bool:
        if not is_aligned:
            return False
        if self._last_fired_ms is not None and not self._cooled_down(now_ms):
            return False
        self._last_fired_ms = now_ms
        return True

    def reset(self) -> None:
        self._last_fired_ms = None

    def _cooled_down(self, now_ms: float) -> bool:
        elapsed = now_ms - self._last_fired_ms
        if self.inclusive:
            return elapsed >= self.cooldown_ms
        return elapsed > self.cooldown_ms
