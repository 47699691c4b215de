from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import MemberStatus


@dataclass(frozen=True)
class CohortMember:
    """Domain entity: a student enrolled in a cohort."""

    member_id: str
    cohort_id: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    dropped_out_status: MemberStatus = MemberStatus.ACTIVE

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        return self.dropped_out_status == MemberStatus.ACTIVE


@dataclass(frozen=True)
class Epic:
    """A named phase of a cohort's program."""

    epic_id: str
    cohort_id: str
    name: str
