"""accounts, login and the user's own profile"""

import logging
from enum import Enum

from termcolor import cprint, colored

from pizza_store import config
from pizza_store.console import Console, truncate
from pizza_store.database import DatabaseManager
from pizza_store.errors import (
    AuthorizationError,
    DuplicateLoginError,
    InvalidInputError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)


class Role(Enum):
    """stored as text in Users.role; always compared by value"""
    CUSTOMER = "customer"
    DRIVER = "driver"
    MANAGER = "manager"

    @classmethod
    def parse(cls, text: str) -> "Role":
        try:
            return cls(text.strip().lower())
        except ValueError:
            choices = ", ".join(r.value for r in cls)
            raise InvalidInputError(f"'{text}' is not a role (choose {choices})") from None


STAFF_ROLES = (Role.DRIVER, Role.MANAGER)


class AccountManager:
    """create accounts, check credentials and look up roles"""
    def __init__(self, db: DatabaseManager, console: Console):
        self.db = db
        self.console = console

    def user_exists(self, login: str) -> bool:
        return self.db.query_count(
            "SELECT login FROM Users WHERE login=?;", (login,)
        ) != 0

    def create_account(self, login: str, password: str, phone: str):
        """insert a new customer; DuplicateLoginError if the login is taken"""
        login = truncate(login, config.MAX_LOGIN_LENGTH)
        password = truncate(password, config.MAX_PASSWORD_LENGTH)
        phone = truncate(phone, config.MAX_PHONE_LENGTH)
        if not login:
            raise InvalidInputError("login cannot be empty")
        if self.user_exists(login):
            raise DuplicateLoginError(login)
        self.db.execute(
            "INSERT INTO Users(login, password, role, phoneNum) VALUES(?,?,?,?);",
            (login, password, Role.CUSTOMER.value, phone)
        )
        logger.info("created account %s", login)

    def log_in(self, login: str, password: str) -> str | None:
        """return the login if credentials match, otherwise none

        the password is only checked once the login is known to exist.
        """
        login = truncate(login, config.MAX_LOGIN_LENGTH)
        if not self.user_exists(login):
            cprint("this login does not exist", "red")
            return None
        matches = self.db.query_count(
            "SELECT login FROM Users WHERE login=? AND password=?;",
            (login, truncate(password, config.MAX_PASSWORD_LENGTH))
        )
        if matches != 1:
            cprint("this login and password is invalid", "red")
            return None
        return login

    def role_of(self, login: str) -> Role:
        """fresh role lookup; roles can change between handlers"""
        rows = self.db.query_rows("SELECT role FROM Users WHERE login=?;", (login,))
        if not rows:
            raise RecordNotFoundError(f"user '{login}' does not exist")
        return Role(rows[0][0])

    def require_role(self, login: str, *allowed: Role) -> Role:
        """guard for role-gated handlers"""
        role = self.role_of(login)
        if role not in allowed:
            needed = " or ".join(r.value for r in allowed)
            raise AuthorizationError(f"you lack the privileges to do this ({needed} only)")
        return role

    # interactive handlers
    def signup(self):
        """prompt for a new customer account"""
        login = truncate(self.console.ask("enter your login (up to 50 characters): "),
                         config.MAX_LOGIN_LENGTH)
        print(f"your login is: {colored(login, 'yellow', attrs=['bold'])}")
        if self.user_exists(login):
            raise DuplicateLoginError(login)
        password = self.console.ask("enter your password (up to 30 characters): ")
        phone = self.console.ask("enter your phone number: ")
        self.create_account(login, password, phone)
        cprint("account created", "green")

    def login(self) -> str | None:
        """prompt for credentials; return the login on success"""
        login = truncate(self.console.ask("enter your login (up to 50 characters): "),
                         config.MAX_LOGIN_LENGTH)
        if not self.user_exists(login):
            cprint("this login does not exist", "red")
            return None
        password = self.console.ask("enter your password: ")
        user = self.log_in(login, password)
        if user is not None:
            cprint(f"logged in as {colored(user, 'yellow', attrs=['bold'])}", "green")
        return user

    def view_profile(self, login: str):
        """customers see their own profile; staff see every user"""
        if self.role_of(login) is Role.CUSTOMER:
            self.db.query_print(
                "SELECT favoriteItems, phoneNum FROM Users WHERE login=?;", (login,)
            )
        else:
            self.db.query_print(
                "SELECT login, role, favoriteItems, phoneNum FROM Users ORDER BY login;"
            )

    def update_profile(self, login: str):
        """change the user's own favorite item or phone number"""
        print("select choice to update:")
        print("1. favorite item")
        print("2. phone number")
        choice = self.console.choose()
        if choice == 1:
            value = self.console.ask("give the name of the new favorite item: ")
            self.db.execute(
                "UPDATE Users SET favoriteItems=? WHERE login=?;", (value, login)
            )
        elif choice == 2:
            value = truncate(self.console.ask("give the new phone number: "),
                             config.MAX_PHONE_LENGTH)
            self.db.execute(
                "UPDATE Users SET phoneNum=? WHERE login=?;", (value, login)
            )
        else:
            cprint("unrecognized choice!", "red"); return
        cprint("profile updated", "green")
