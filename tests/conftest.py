import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import school_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from school_toolkit.calendar.table import default_table  # noqa: E402
from school_toolkit.core.models.results import SubjectSpec  # noqa: E402


# Common test fixtures
@pytest.fixture
def bs_table():
    """The bundled BS month-length table."""
    return default_table()


@pytest.fixture
def calendar_table_payload() -> dict:
    """Smallest valid two-year table, taken from the bundled data."""
    return {
        "table_schema_version": 1,
        "table_version": "test",
        "epoch": {"bs": "2000-01-01", "ad": "1943-04-14"},
        "years": {
            "2000": [30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31],
            "2001": [31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30],
        },
    }


@pytest.fixture
def math_and_science():
    """Math (theory only) and Science (theory + practical) subject specs."""
    return [
        SubjectSpec("Math", theory_fm=100, theory_pm=40),
        SubjectSpec(
            "Science",
            theory_fm=75,
            theory_pm=30,
            has_practical=True,
            practical_fm=25,
            practical_pm=10,
        ),
    ]
