import csv
import io
from datetime import date, datetime, timezone
from types import SimpleNamespace

from skillconnect.services.csv_export import USER_EXPORT_COLUMNS, export_filename, users_to_csv


def _user(**kw):
    base = dict(
        first_name="Jane",
        last_name="Doe",
        email="jane@example.com",
        role="seeker",
        status="active",
        created_at=datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc),
        last_login=None,
    )
    base.update(kw)
    return SimpleNamespace(**base)


def test_header_and_rows():
    body = users_to_csv([_user()])
    rows = list(csv.reader(io.StringIO(body)))
    assert rows[0] == USER_EXPORT_COLUMNS
    assert rows[1] == ["Jane Doe", "jane@example.com", "seeker", "active", "2026-01-05", ""]


def test_embedded_commas_and_quotes_survive():
    tricky = _user(first_name='Otieno "OJ"', last_name="Ltd, Co")
    body = users_to_csv([tricky])
    assert '"Otieno ""OJ"" Ltd, Co"' in body
    rows = list(csv.reader(io.StringIO(body)))
    assert rows[1][0] == 'Otieno "OJ" Ltd, Co'
    assert len(rows[1]) == len(USER_EXPORT_COLUMNS)


def test_missing_status_defaults_to_active():
    rows = list(csv.reader(io.StringIO(users_to_csv([_user(status=None)]))))
    assert rows[1][3] == "active"


def test_export_filename():
    assert export_filename(date(2026, 10, 19)) == "users_export_2026-10-19.csv"


def test_formula_like_cells_are_neutralized():
    body = users_to_csv([
        _user(first_name="=HYPERLINK(\"http://x\")", last_name=""),
        _user(first_name="+254", last_name="Caller", email="@me@example.com"),
        _user(first_name="-1", last_name="Minus"),
    ])
    rows = list(csv.reader(io.StringIO(body)))
    assert rows[1][0] == "'=HYPERLINK(\"http://x\")"
    assert rows[2][0] == "'+254 Caller"
    assert rows[2][1] == "'@me@example.com"
    assert rows[3][0] == "'-1 Minus"
    assert users_to_csv([_user()]).splitlines()[1].startswith("Jane Doe,")
