"""Example: call the calculation dispatcher directly (no Flask).

Controllers stay thin; every calculation lives in the analytics service.
"""

import json
from datetime import date

from src.attendance_analytics.attendance_analytics.attendance.model import AttendanceRecord
from src.attendance_analytics.attendance_analytics.cohorts.model import CohortMember, Epic
from src.attendance_analytics.attendance_analytics.container import build_container
from src.attendance_analytics.attendance_analytics.core.enums import AbsenceType, AttendanceStatus
from src.attendance_analytics.attendance_analytics.database.memory_store import InMemoryRecordStore


def main():
    store = InMemoryRecordStore()
    store.add_epic(Epic(epic_id="e1", cohort_id="c1", name="Foundations"))
    store.add_member(CohortMember(member_id="s1", cohort_id="c1", first_name="Alice", last_name="Able"))
    store.add_member(CohortMember(member_id="s2", cohort_id="c1", first_name="Bob", last_name="Brown"))

    for day in (3, 4, 5, 6):
        store.add_records(
            [
                AttendanceRecord("c1", "e1", "s1", date(2025, 3, day), 1, AttendanceStatus.PRESENT),
                AttendanceRecord("c1", "e1", "s2", date(2025, 3, day), 1, AttendanceStatus.ABSENT, AbsenceType.UNINFORMED),
            ]
        )

    container = build_container(store=store)
    for action in ("getLeaderboard", "getDropOutRadar"):
        response = container.dispatcher.dispatch({"action": action, "params": {"cohortId": "c1", "epicId": "e1"}})
        print(json.dumps(response.as_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
