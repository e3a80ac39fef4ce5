"""Monotonic outlook state machine: neutral -> favorable|challenging -> mixed."""

from __future__ import annotations

from cosmicops.schemas.horoscope import Outlook

# Signals an influence can emit
FAVORABLE = Outlook.FAVORABLE
CHALLENGING = Outlook.CHALLENGING

TRANSITIONS: dict[tuple[Outlook, Outlook], Outlook] = {
    (Outlook.NEUTRAL, FAVORABLE): Outlook.FAVORABLE,
    (Outlook.NEUTRAL, CHALLENGING): Outlook.CHALLENGING,
    (Outlook.FAVORABLE, FAVORABLE): Outlook.FAVORABLE,
    (Outlook.FAVORABLE, CHALLENGING): Outlook.MIXED,
    (Outlook.CHALLENGING, CHALLENGING): Outlook.CHALLENGING,
    (Outlook.CHALLENGING, FAVORABLE): Outlook.MIXED,
    (Outlook.MIXED, FAVORABLE): Outlook.MIXED,
    (Outlook.MIXED, CHALLENGING): Outlook.MIXED,
}


def advance(state: Outlook, signal: Outlook) -> Outlook:
    """Next outlook after an influence fires with `signal`."""
    try:
        return TRANSITIONS[(state, signal)]
    except KeyError:
        raise ValueError(f"Invalid outlook signal {signal.value!r}") from None


class OutlookTracker:
    """Accumulates signals; the state is never reset."""

    def __init__(self) -> None:
        self.state = Outlook.NEUTRAL
        self.fired = 0

    def record(self, signal: Outlook) -> Outlook:
        self.state = advance(self.state, signal)
        self.fired += 1
        return self.state
