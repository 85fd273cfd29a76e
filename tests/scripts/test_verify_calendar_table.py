import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[2] / "scripts"))

from school_toolkit.core.models.dates import CalendarDate  # noqa: E402
from verify_calendar_table import MID_YEAR_ANCHORS, check_anchors, check_walk, main  # noqa: E402


def test_verify_bundled_table_passes(bs_table):
    assert check_anchors(bs_table) == []
    assert check_walk(bs_table) == []
    assert main([]) == 0


def test_verify_shifted_table_reports_anchor(tmp_path: Path, calendar_table_payload):
    # Same month lengths, epoch one day late
    calendar_table_payload["epoch"]["ad"] = "1943-04-15"
    path = tmp_path / "shifted.json"
    path.write_text(json.dumps(calendar_table_payload), encoding="utf-8")

    assert main([str(path)]) == 1


def test_verify_missing_table_fails(tmp_path: Path):
    assert main([str(tmp_path / "nope.json")]) == 1


class TestMidYearAnchors:
    """Month lengths that are wrong inside a correct year total."""

    def test_check_anchors_when_months_swapped_then_problem_reported(self, tmp_path: Path):
        """Swapping Jestha and Asar 2081 keeps every Baisakh 1 but moves Asar 15."""
        bundled = Path(__file__).resolve().parents[2] / "src" / "school_toolkit" / "calendar" / "data" / "bs_month_lengths.json"
        payload = json.loads(bundled.read_text(encoding="utf-8"))
        months = payload["years"]["2081"]
        months[1], months[2] = months[2], months[1]
        path = tmp_path / "swapped.json"
        path.write_text(json.dumps(payload), encoding="utf-8")

        assert main([str(path)]) == 1

    def test_check_anchors_when_bundled_table_then_mid_year_days_match(self, bs_table):
        """Every mid-year anchor lands on its published AD day."""
        for (year, month, day), ad in MID_YEAR_ANCHORS.items():
            assert bs_table.offset_to_ad(bs_table.bs_to_offset(CalendarDate.bs(year, month, day))) == ad
