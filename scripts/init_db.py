#!/usr/bin/env python3
"""Create the events table for the configured database."""

import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from eventboard.db import Database, DatabaseConfig, DatabaseError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def init_database() -> bool:
    """Create missing tables. Returns False if the database is unusable."""
    database = Database(DatabaseConfig())
    try:
        database.init_db()
        logger.info(f"Schema ready at {database.engine.url.render_as_string(hide_password=True)}")
        return True
    except DatabaseError as e:
        logger.error(f"Failed to initialize database: {e}")
        return False
    finally:
        database.dispose()

if __name__ == "__main__":
    success = init_database()
    sys.exit(0 if success else 1)
