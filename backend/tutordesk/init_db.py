"""
Schema bootstrap for local SQLite databases.

PostgreSQL deployments run the Alembic migrations instead; the overlap
exclusion constraint only exists there.
"""

import logging

from sqlalchemy.engine import Engine

from .database import Base, engine as default_engine
from . import models  # noqa: F401  registers every table on Base.metadata

logger = logging.getLogger(__name__)


def init_db(bind: Engine = default_engine) -> bool:
    """Create missing tables on SQLite. Returns True when tables were created."""
    if bind.dialect.name != "sqlite":
        logger.info("Skipping create_all on %s; run alembic upgrade head", bind.dialect.name)
        return False
    Base.metadata.create_all(bind=bind)
    logger.info("SQLite schema ready at %s", bind.url)
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
