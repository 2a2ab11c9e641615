from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import UnitSession


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[UnitSession]:
        raise NotImplementedError

    def list_by_units(self, unit_ids: Iterable[int]) -> Sequence[UnitSession]:
        raise NotImplementedError

    def set_active(self, session_id: int, *, is_active: bool) -> Optional[UnitSession]:
        """Toggle the externally owned active flag. Returns None if the session is missing."""

        raise NotImplementedError
