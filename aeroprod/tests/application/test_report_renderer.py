from aeroprod.application.services import ReportRenderer
from aeroprod.domain.production.entities import Part
from aeroprod.domain.production.value_objects.enums import (
    PartCategory,
    PartStatus,
    QualityTestKind,
)
from aeroprod.tests.factories import approved, rejected


class TestReportRenderer:
    def test_render_layout(self, make_aircraft):
        aircraft = make_aircraft(stages=["Assembly", "Paint"])
        aircraft.parts.append(
            Part(
                name="Wing",
                category=PartCategory.IMPORTED,
                supplier="Acme",
                status=PartStatus.RECEIVED,
            )
        )
        aircraft.stages[0].assign_employee("e1")
        aircraft.stages[0].assign_employee("e2")
        aircraft.tests.extend([rejected(QualityTestKind.HYDRAULIC), approved()])

        assert ReportRenderer.render(aircraft).splitlines() == [
            "Aircraft: AC1 - E195-E2 (COMMERCIAL)",
            "Capacity: 132 - Range: 4800 km",
            "",
            "Parts:",
            " - Wing | IMPORTED | Acme | RECEIVED",
            "",
            "Stages:",
            " - Assembly | Deadline: 10 days | PENDING | Employees: e1,e2",
            " - Paint | Deadline: 10 days | PENDING | Employees: ",
            "",
            "Tests:",
            " - HYDRAULIC : REJECTED",
            " - ELECTRICAL : APPROVED",
        ]

    def test_empty_aircraft(self, make_aircraft):
        text = ReportRenderer.render(make_aircraft())

        assert text.endswith("Parts:\n\nStages:\n\nTests:")

    def test_write_sanitizes_file_name(self, tmp_path, make_aircraft):
        renderer = ReportRenderer(tmp_path / "reports")

        path = renderer.write(make_aircraft(code="PT/../X 1"))

        assert path == tmp_path / "reports" / "report_PT_.._X_1.txt"
        assert path.read_text(encoding="utf-8").startswith("Aircraft: PT/../X 1")
