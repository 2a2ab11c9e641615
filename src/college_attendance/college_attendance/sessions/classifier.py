"""Session state classification.

Pure functions of (session, now). Nothing is stored: the state is recomputed
on every query against the supplied clock value.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.enums import SessionState
from .model import UnitSession


def classify(session: UnitSession, now: datetime) -> SessionState:
    if now < session.start_time:
        return SessionState.UPCOMING
    if now < session.end_time:
        return SessionState.ACTIVE
    return SessionState.PAST


def time_until_start(session: UnitSession, now: datetime) -> timedelta:
    """Signed; negative once the session has started."""
    return session.start_time - now


def time_remaining(session: UnitSession, now: datetime) -> timedelta:
    """Signed; negative once the session has ended."""
    return session.end_time - now


@dataclass(frozen=True)
class SessionStatus:
    session: UnitSession
    state: SessionState
    time_until_start: timedelta
    time_remaining: timedelta

    @property
    def is_open_for_marking(self) -> bool:
        return self.session.is_active or self.state == SessionState.ACTIVE


def describe(session: UnitSession, now: datetime) -> SessionStatus:
    return SessionStatus(
        session=session,
        state=classify(session, now),
        time_until_start=time_until_start(session, now),
        time_remaining=time_remaining(session, now),
    )
