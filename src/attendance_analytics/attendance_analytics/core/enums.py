from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status marked for a student in one session."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class AbsenceType(str, Enum):
    """Justification attached to an absence. Unset means unexplained."""

    UNINFORMED = "uninformed"
    INFORMED = "informed"
    EXEMPTED = "exempted"


class MemberStatus(str, Enum):
    ACTIVE = "active"
    DROPPED_OUT = "dropped_out"


class HolidayType(str, Enum):
    GLOBAL = "global"
    COHORT_SPECIFIC = "cohort_specific"


class HolidayStatus(str, Enum):
    PUBLISHED = "published"
    DRAFT = "draft"


class Severity(str, Enum):
    """Drop-out radar alert level."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class Action(str, Enum):
    """Calculations exposed through the dispatcher."""

    SESSION_STATS = "getSessionStats"
    EPIC_STATS = "getEpicStats"
    CALENDAR_DATA = "getCalendarData"
    LEADERBOARD = "getLeaderboard"
    STUDENT_STATS = "getStudentStats"
    STUDENT_STREAKS = "getStudentStreaks"
    PUBLIC_LEADERBOARD = "getPublicLeaderboard"
    DROP_OUT_RADAR = "getDropOutRadar"
