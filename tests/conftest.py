import pytest

from pizza_store.accounts import AccountManager
from pizza_store.admin import AdminManager
from pizza_store.cli import Application
from pizza_store.console import Console
from pizza_store.database import DatabaseManager
from pizza_store.menu import MenuBrowser
from pizza_store.orders import OrderManager


class ScriptedInput:
    """stand-in for `input`: hands out queued lines, EOF when empty"""
    def __init__(self):
        self.lines: list[str] = []

    def feed(self, *lines: str):
        self.lines.extend(lines)

    def __call__(self, prompt: str = "") -> str:
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


# Seeded in-memory database, fresh for every test
@pytest.fixture
def db():
    database = DatabaseManager(":memory:")
    yield database
    database.close()


# No seed rows at all (no users, items or stores)
@pytest.fixture
def empty_db():
    database = DatabaseManager(":memory:", seed=False)
    yield database
    database.close()


@pytest.fixture
def script():
    return ScriptedInput()


@pytest.fixture
def console(script):
    return Console(reader=script)


@pytest.fixture
def accounts(db, console):
    return AccountManager(db, console)


@pytest.fixture
def menu(db, console):
    return MenuBrowser(db, console)


@pytest.fixture
def orders(db, console, accounts):
    return OrderManager(db, console, accounts)


@pytest.fixture
def admin(db, console, accounts):
    return AdminManager(db, console, accounts)


@pytest.fixture
def app(db, console):
    return Application(db, console)


# One user per role
@pytest.fixture
def users(db):
    db.execute(
        "INSERT INTO Users(login, password, role, phoneNum) VALUES(?,?,?,?);",
        ("carol", "pw", "customer", "555-0001")
    )
    db.execute(
        "INSERT INTO Users(login, password, role, phoneNum) VALUES(?,?,?,?);",
        ("dave", "pw", "driver", "555-0002")
    )
    db.execute(
        "INSERT INTO Users(login, password, role, phoneNum) VALUES(?,?,?,?);",
        ("mona", "pw", "manager", "555-0003")
    )
    return {"customer": "carol", "driver": "dave", "manager": "mona"}
