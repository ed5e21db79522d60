import csv
import io
from datetime import date, datetime
from typing import Iterable

from skillconnect.models.user import User

USER_EXPORT_COLUMNS = ["Name", "Email", "Role", "Status", "Joined Date", "Last Activity"]

# Spreadsheets evaluate cells starting with these as formulas
FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def _fmt_date(value: datetime | None) -> str:
    return value.date().isoformat() if value else ""


def _name(user: User) -> str:
    return f"{user.first_name or ''} {user.last_name or ''}".strip()


def _cell(value: str | None) -> str:
    value = value or ""
    return f"'{value}" if value.startswith(FORMULA_PREFIXES) else value


def users_to_csv(users: Iterable[User]) -> str:
    """Render users as CSV; the csv module quotes embedded commas, quotes and newlines."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(USER_EXPORT_COLUMNS)
    for user in users:
        writer.writerow(
            [
                _cell(_name(user)),
                _cell(user.email),
                _cell(user.role),
                _cell(user.status or "active"),
                _fmt_date(user.created_at),
                _fmt_date(user.last_login),
            ]
        )
    return buf.getvalue()


def export_filename(today: date | None = None) -> str:
    return f"users_export_{(today or date.today()).isoformat()}.csv"
