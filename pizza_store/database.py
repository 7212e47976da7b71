"""sqlite gateway: one connection, schema, seed data and the query primitives"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from pizza_store import config
from pizza_store.errors import DataAccessError, StoreConnectionError

logger = logging.getLogger(__name__)

Params = Sequence[Any]

SCHEMA = f"""--sql
CREATE TABLE IF NOT EXISTS Users (
    login TEXT PRIMARY KEY CHECK (length(login) BETWEEN 1 AND {config.MAX_LOGIN_LENGTH}),
    password TEXT NOT NULL CHECK (length(password) <= {config.MAX_PASSWORD_LENGTH}),
    role TEXT NOT NULL DEFAULT 'customer' CHECK (role IN ('customer', 'driver', 'manager')),
    favoriteItems TEXT,
    phoneNum TEXT CHECK (length(phoneNum) <= {config.MAX_PHONE_LENGTH})
);
CREATE TABLE IF NOT EXISTS Items (
    itemName TEXT PRIMARY KEY,
    ingredients TEXT NOT NULL,
    typeOfItem TEXT NOT NULL,
    price REAL NOT NULL,
    description TEXT
);
CREATE TABLE IF NOT EXISTS Store (
    storeID INTEGER PRIMARY KEY,
    address TEXT NOT NULL,
    city TEXT NOT NULL,
    state TEXT NOT NULL,
    isOpen TEXT NOT NULL DEFAULT 'yes',
    reviewScore REAL
);
CREATE TABLE IF NOT EXISTS FoodOrder (
    orderID INTEGER PRIMARY KEY AUTOINCREMENT,
    login TEXT NOT NULL,
    storeID INTEGER NOT NULL,
    totalPrice REAL NOT NULL,
    orderTimestamp TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    orderStatus TEXT NOT NULL DEFAULT '{config.DEFAULT_ORDER_STATUS}',
    FOREIGN KEY(login) REFERENCES Users(login) ON UPDATE CASCADE,
    FOREIGN KEY(storeID) REFERENCES Store(storeID)
);
CREATE TABLE IF NOT EXISTS ItemsInOrder (
    orderID INTEGER NOT NULL,
    itemName TEXT NOT NULL,
    quantity INTEGER NOT NULL CHECK (quantity > 0),
    PRIMARY KEY(orderID, itemName),
    FOREIGN KEY(orderID) REFERENCES FoodOrder(orderID) ON DELETE CASCADE,
    FOREIGN KEY(itemName) REFERENCES Items(itemName) ON UPDATE CASCADE
);
CREATE TRIGGER IF NOT EXISTS trg_item_price_insert
BEFORE INSERT ON Items
WHEN NEW.price <= 0
BEGIN
    SELECT RAISE(ABORT, 'price must be positive');
END;
CREATE TRIGGER IF NOT EXISTS trg_item_price_update
BEFORE UPDATE ON Items
WHEN NEW.price <= 0
BEGIN
    SELECT RAISE(ABORT, 'price must be positive');
END;
"""

SEED_ITEMS = [
    ("Cheese Pizza", "cheese,tomato sauce,dough", "entree", 12.00, "classic cheese"),
    ("Pepperoni Pizza", "pepperoni,cheese,tomato sauce,dough", "entree", 14.00, None),
    ("Hawaiian Pizza", "ham,pineapple,cheese,dough", "entree", 15.50, "yes, pineapple"),
    ("Garlic Bread", "bread,garlic,butter", "sides", 4.50, None),
    ("Wings", "chicken,buffalo sauce", "sides", 8.00, "six pieces"),
    ("Lemonade", "lemon,sugar,water", "drinks", 2.50, None),
    ("Cola", "soda", "drinks", 2.00, None),
]

SEED_STORES = [
    (1, "123 Main St", "Riverside", "CA", "yes", 4.5),
    (2, "456 Oak Ave", "Irvine", "CA", "yes", 4.0),
    (3, "789 Pine Rd", "Fresno", "CA", "no", 3.2),
]


def resolve_db_path(dbname: str) -> str:
    """map a database name onto a sqlite file (":memory:" passes through)"""
    if dbname == config.MEMORY_DB or dbname.endswith(config.DB_SUFFIX):
        return dbname
    return dbname + config.DB_SUFFIX


class DatabaseManager:
    """own the sqlite connection and expose the query/execute primitives

    every call is an independent round trip in autocommit mode except inside
    `transaction()`. sqlite failures surface as DataAccessError.
    """
    def __init__(self, path: str = config.MEMORY_DB, seed: bool = True):
        self.path = path
        try:
            self.conn = sqlite3.connect(path)
            self.conn.autocommit = True
            self.conn.execute("--sql\nPRAGMA foreign_keys=ON;")
            self.conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            raise StoreConnectionError(f"unable to open database '{path}': {e}") from e
        if seed:
            self._seed()

    def _seed(self):
        """seed stores, menu and a default manager once"""
        self.conn.executemany(
            "INSERT OR IGNORE INTO Store VALUES(?,?,?,?,?,?);", SEED_STORES
        )
        self.conn.executemany(
            "INSERT OR IGNORE INTO Items VALUES(?,?,?,?,?);", SEED_ITEMS
        )
        if config.SEED_DEFAULT_MANAGER:
            self.conn.execute(
                "INSERT OR IGNORE INTO Users(login, password, role) VALUES(?,?,?);",
                (config.DEFAULT_MANAGER_LOGIN, config.DEFAULT_MANAGER_PASSWORD, "manager")
            )

    def _run(self, sql: str, params: Params) -> sqlite3.Cursor:
        try:
            return self.conn.execute(sql, tuple(params))
        except (sqlite3.Error, OverflowError) as e:
            raise DataAccessError(str(e)) from e

    def execute(self, sql: str, params: Params = ()) -> int:
        """run a write statement and return affected rows"""
        return self._run(sql, params).rowcount

    def insert(self, sql: str, params: Params = ()) -> int:
        """run an insert and return the new rowid"""
        return self._run(sql, params).lastrowid

    def query_count(self, sql: str, params: Params = ()) -> int:
        return len(self._fetch(sql, params)[1])

    def query_rows(self, sql: str, params: Params = ()) -> list[list[str | None]]:
        """materialize every column of every row as text"""
        return [
            [None if v is None else str(v) for v in row]
            for row in self._fetch(sql, params)[1]
        ]

    def query_print(self, sql: str, params: Params = ()) -> int:
        """print rows tab-separated with one header line; return row count"""
        columns, rows = self._fetch(sql, params)
        if rows:
            print("\t".join(columns))
        for row in rows:
            print("\t".join("null" if v is None else str(v) for v in row))
        return len(rows)

    def _fetch(self, sql: str, params: Params) -> tuple[list[str], list[tuple]]:
        cur = self._run(sql, params)
        try:
            rows = cur.fetchall()
        except sqlite3.Error as e:
            raise DataAccessError(str(e)) from e
        columns = [d[0] for d in cur.description or ()]
        return columns, rows

    @contextmanager
    def transaction(self) -> Iterator["DatabaseManager"]:
        """group statements so they commit together or not at all"""
        self._run("BEGIN;", ())
        try:
            yield self
            self._run("COMMIT;", ())
        except BaseException:
            if self.conn.in_transaction:
                self.conn.execute("ROLLBACK;")
            logger.warning("transaction rolled back")
            raise

    def close(self):
        if self.conn:
            self.conn.close()
            self.conn = None
