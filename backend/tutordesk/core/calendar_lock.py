"""
Write lock around the tutor's calendar.

Booking is "read overlapping lessons, then insert". Two requests for the same
interval must not both pass the read before either commits, so every write
that changes an occupied interval runs inside ``calendar_write_lock``:

* PostgreSQL: ``pg_advisory_xact_lock``, released when the surrounding
  transaction commits or rolls back. The ``lessons_no_overlap`` exclusion
  constraint backs it up at the storage level.
* Other dialects (SQLite in development and tests): a process-wide lock held
  until the block exits, so the caller must commit inside the block.
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
import threading
from typing import Iterator

from sqlalchemy import text
from sqlalchemy.orm import Session

from tutordesk.database.session_utils import get_dialect_name

logger = logging.getLogger(__name__)

# Single tutor, single calendar: one advisory key is enough.
CALENDAR_ADVISORY_LOCK_KEY = 0x7475746F72  # "tutor"

_PROCESS_LOCK = threading.Lock()


@contextmanager
def calendar_write_lock(db: Session) -> Iterator[None]:
    if get_dialect_name(db) == "postgresql":
        db.execute(
            text("SELECT pg_advisory_xact_lock(:key)"),
            {"key": CALENDAR_ADVISORY_LOCK_KEY},
        )
        logger.debug("calendar_lock_acquired", extra={"mode": "advisory"})
        yield
        return

    with _PROCESS_LOCK:
        logger.debug("calendar_lock_acquired", extra={"mode": "process"})
        yield
