from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date

from ..attendance.model import DayStats
from ..attendance.service import AttendanceService
from ..common.datetime_utils import to_iso_date
from ..core.enums import AttendanceStatus
from ..roster.service import RosterService

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT: "Absent",
}
UNMARKED_LABEL = "Not Marked"

CSV_FIELDS = ["roll_label", "name", "status"]
CSV_HEADERS = {"roll_label": "Roll No.", "name": "Name", "status": "Status"}


@dataclass(frozen=True)
class DailyReport:
    """Read-model for one date (rows in roll order plus totals)."""

    work_date: str
    rows: list[dict]
    stats: DayStats


class DailyReportService:
    def __init__(self, roster: RosterService, attendance: AttendanceService):
        self._roster = roster
        self._attendance = attendance

    def build(self, work_date: date | str) -> DailyReport:
        day = to_iso_date(work_date)
        marks = self._attendance.marks_for(day)

        rows = []
        for entity in self._roster.list_sorted():
            status = marks.get(entity.entity_id)
            rows.append(
                {
                    "entity_id": entity.entity_id,
                    "roll_label": entity.roll_label,
                    "name": entity.name,
                    "status": STATUS_LABELS.get(status, UNMARKED_LABEL),
                }
            )
        return DailyReport(work_date=day, rows=rows, stats=self._attendance.stats_for_date(day))


def report_to_csv(report: DailyReport) -> bytes:
    """CSV with a BOM so spreadsheet apps pick up UTF-8."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
    writer.writerow(CSV_HEADERS)
    for row in report.rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")
