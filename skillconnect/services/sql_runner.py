"""
Run a SQL provisioning file statement by statement.

The splitter understands enough PostgreSQL lexing to keep semicolons that sit
inside quotes, dollar-quoted function bodies and comments.
"""

import logging
import re
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

_DOLLAR_TAG = re.compile(r"\$[A-Za-z_][A-Za-z0-9_]*\$|\$\$")


def split_sql_statements(sql: str) -> list[str]:
    statements = []
    buf = []
    i = 0
    n = len(sql)
    while i < n:
        ch = sql[i]
        nxt = sql[i + 1] if i + 1 < n else ""

        if ch == "-" and nxt == "-":
            end = sql.find("\n", i)
            end = n if end == -1 else end
            buf.append(sql[i:end])
            i = end
            continue

        if ch == "/" and nxt == "*":
            end = sql.find("*/", i + 2)
            end = n if end == -1 else end + 2
            buf.append(sql[i:end])
            i = end
            continue

        if ch in ("'", '"'):
            j = i + 1
            while j < n:
                if sql[j] == ch:
                    # doubled quote is an escaped quote
                    if j + 1 < n and sql[j + 1] == ch:
                        j += 2
                        continue
                    break
                j += 1
            end = min(j + 1, n)
            buf.append(sql[i:end])
            i = end
            continue

        if ch == "$":
            m = _DOLLAR_TAG.match(sql, i)
            if m:
                tag = m.group(0)
                close = sql.find(tag, m.end())
                end = n if close == -1 else close + len(tag)
                buf.append(sql[i:end])
                i = end
                continue

        if ch == ";":
            statement = "".join(buf).strip()
            if statement:
                statements.append(statement)
            buf = []
            i += 1
            continue

        buf.append(ch)
        i += 1

    tail = "".join(buf).strip()
    if tail:
        statements.append(tail)
    return [s for s in statements if not _only_comments(s)]


def _only_comments(statement: str) -> bool:
    stripped = re.sub(r"--[^\n]*", "", statement)
    stripped = re.sub(r"/\*.*?\*/", "", stripped, flags=re.DOTALL)
    return not stripped.strip()


def run_sql(engine: Engine, sql: str) -> int:
    """Execute statements in order inside one transaction. Returns the count executed."""
    statements = split_sql_statements(sql)
    logger.info("Executing %d SQL statements", len(statements))
    with engine.begin() as conn:
        for idx, statement in enumerate(statements, start=1):
            preview = " ".join(statement.split())[:80]
            logger.info("[%d/%d] %s", idx, len(statements), preview)
            try:
                conn.execute(text(statement))
            except Exception:
                logger.exception("Statement %d failed; rolling back", idx)
                raise
    return len(statements)


def run_sql_file(engine: Engine, path: str | Path) -> int:
    sql = Path(path).read_text(encoding="utf-8")
    return run_sql(engine, sql)
