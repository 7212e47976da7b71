"""constants shared across the client"""

import os

# field caps, matching the Users table checks
MAX_LOGIN_LENGTH = 50
MAX_PASSWORD_LENGTH = 30
MAX_PHONE_LENGTH = 20

RECENT_ORDER_LIMIT = 5
DEFAULT_ORDER_STATUS = "incomplete"

DB_SUFFIX = ".db"
MEMORY_DB = ":memory:"

# seed data is only inserted when missing (INSERT OR IGNORE)
SEED_DEFAULT_MANAGER = True
DEFAULT_MANAGER_LOGIN = "admin"
DEFAULT_MANAGER_PASSWORD = "admin"

LOG_LEVEL = os.environ.get("PIZZA_STORE_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
