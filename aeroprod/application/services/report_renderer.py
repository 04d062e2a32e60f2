"""
Report renderer.

Formats a read-only snapshot of an aircraft as plain text and writes it to
``<reports_dir>/report_<code>.txt``.
"""

import logging
import re
from pathlib import Path

from aeroprod.domain.production.entities import Aircraft

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class ReportRenderer:
    def __init__(self, reports_dir: Path) -> None:
        self._reports_dir = Path(reports_dir)

    @property
    def reports_dir(self) -> Path:
        return self._reports_dir

    def path_for(self, code: str) -> Path:
        safe_code = _UNSAFE_FILENAME_CHARS.sub("_", code)
        return self._reports_dir / f"report_{safe_code}.txt"

    @staticmethod
    def render(aircraft: Aircraft) -> str:
        lines = [
            f"Aircraft: {aircraft.code} - {aircraft.model} ({aircraft.category.value})",
            f"Capacity: {aircraft.capacity} - Range: {aircraft.range_km} km",
            "",
            "Parts:",
        ]
        lines.extend(
            f" - {p.name} | {p.category.value} | {p.supplier} | {p.status.value}"
            for p in aircraft.parts
        )
        lines += ["", "Stages:"]
        lines.extend(
            f" - {s.name} | Deadline: {s.deadline_days} days | {s.status.value}"
            f" | Employees: {','.join(s.employee_ids)}"
            for s in aircraft.stages
        )
        lines += ["", "Tests:"]
        lines.extend(f" - {t.kind.value} : {t.outcome.value}" for t in aircraft.tests)
        return "\n".join(lines)

    def write(self, aircraft: Aircraft) -> Path:
        """Render ``aircraft`` and write it to the reports directory."""
        self._reports_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(aircraft.code)
        path.write_text(self.render(aircraft), encoding="utf-8")
        logger.info("Wrote report for aircraft %s to %s", aircraft.code, path)
        return path
