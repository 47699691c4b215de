from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CohortMember, Epic


class CohortRepository(Protocol):
    def list_active_members(self, cohort_id: str) -> Sequence[CohortMember]:
        raise NotImplementedError

    def get_member(self, member_id: str) -> Optional[CohortMember]:
        """Any member regardless of drop-out status."""

        raise NotImplementedError

    def get_epic(self, epic_id: str) -> Optional[Epic]:
        raise NotImplementedError
