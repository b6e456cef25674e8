import logging

from config import get_settings

settings = get_settings()

logger = logging.getLogger("database")

# read at connection time so tests can point the store at a temporary file
DB_PATH = str(settings.db_path)

# DB_RESET wipes the file only once per process, not on every init_database() call
_DB_WAS_RESET = False
