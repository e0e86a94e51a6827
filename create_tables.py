import logging

from taskboard.core.config import settings
from taskboard.core.logging_setup import setup_logging
from taskboard.db.session import Database

logger = logging.getLogger(__name__)

def create_tables():
    setup_logging(settings.LOG_LEVEL)
    logger.info("Creating all tables in %s...", settings.DB_PATH)
    db = Database(settings.DB_PATH)
    db.init()
    db.close()
    logger.info("Tables created.")

if __name__ == "__main__":
    create_tables()
