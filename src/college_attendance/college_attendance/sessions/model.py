from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import DEFAULT_LOCATION
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class UnitSession:
    """Domain entity: one scheduled meeting of a unit.

    The window is half-open: [start_time, end_time).
    """

    session_id: int
    unit_id: int
    start_time: datetime
    end_time: datetime
    location: Optional[str] = None
    is_active: bool = False

    def __post_init__(self) -> None:
        if self.start_time >= self.end_time:
            raise ValidationError("Session start time must be before its end time")

    @property
    def display_location(self) -> str:
        return self.location or DEFAULT_LOCATION

    @property
    def session_date(self) -> date:
        return self.start_time.date()
