"""Tie-aware standings.

Students are ordered by attendance percentage, then current streak, both
descending. Equal (percentage, streak) pairs share a rank and the next group
takes ``rank + 1``, so ranks repeat but never skip.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..cohorts.model import CohortMember
from ..core.constants import RANK_BADGES


@dataclass(frozen=True)
class StudentStanding:
    member: CohortMember
    attendance_percentage: float
    current_streak: int
    total_sessions: int
    attended_sessions: int

    @property
    def score(self) -> tuple[float, int]:
        return self.attendance_percentage, self.current_streak


@dataclass(frozen=True)
class LeaderboardEntry:
    standing: StudentStanding
    rank: int
    badge: Optional[str]


def badge_for_rank(rank: int) -> Optional[str]:
    return RANK_BADGES.get(rank)


def rank_standings(standings: Sequence[StudentStanding]) -> list[LeaderboardEntry]:
    ordered = sorted(standings, key=lambda s: s.score, reverse=True)

    entries: list[LeaderboardEntry] = []
    rank = 0
    previous: Optional[tuple[float, int]] = None
    for standing in ordered:
        if standing.score != previous:
            rank += 1
            previous = standing.score
        entries.append(LeaderboardEntry(standing=standing, rank=rank, badge=badge_for_rank(rank)))
    return entries


def paginate(entries: Sequence[LeaderboardEntry], *, limit: int, offset: int) -> list[LeaderboardEntry]:
    """Slice already-ranked entries; ranks are never recomputed per page."""
    return list(entries[offset : offset + limit])


def rank_of(entries: Sequence[LeaderboardEntry], member_id: str) -> int:
    for entry in entries:
        if entry.standing.member.member_id == member_id:
            return entry.rank
    return 0
