"""manager-only mutators for menu items and other users"""

import logging
import math

from termcolor import cprint

from pizza_store import config
from pizza_store.accounts import AccountManager, Role
from pizza_store.console import Console, truncate
from pizza_store.database import DatabaseManager
from pizza_store.errors import (
    AuthorizationError,
    DuplicateLoginError,
    InvalidInputError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)


class AdminManager:
    """every handler here checks the caller is a manager before prompting"""
    def __init__(self, db: DatabaseManager, console: Console, accounts: AccountManager):
        self.db = db
        self.console = console
        self.accounts = accounts

    # menu
    def upsert_item(self, name: str, ingredients: str, item_type: str,
                    price: float, description: str | None = None) -> bool:
        """update the item if it exists, otherwise insert it; true if inserted"""
        if not name:
            raise InvalidInputError("item name cannot be empty")
        if not math.isfinite(price) or price <= 0:
            raise InvalidInputError("price must be positive")
        exists = self.db.query_count("SELECT itemName FROM Items WHERE itemName=?;", (name,))
        if exists:
            self.db.execute(
                """--sql
                UPDATE Items SET ingredients=?, typeOfItem=?, price=?, description=?
                WHERE itemName=?;
                """,
                (ingredients, item_type, price, description, name)
            )
        else:
            self.db.execute(
                "INSERT INTO Items(itemName, ingredients, typeOfItem, price, description) VALUES(?,?,?,?,?);",
                (name, ingredients, item_type, price, description)
            )
        logger.info("menu item %s %s", name, "updated" if exists else "added")
        return not exists

    def update_menu(self, login: str):
        self.accounts.require_role(login, Role.MANAGER)
        name = self.console.ask("enter the name of the item you want to update/add: ")
        ingredients = self.console.ask("enter the list of its ingredients: ")
        item_type = self.console.ask("enter the item type: ")
        price = self.console.ask_float("enter the price: ")
        description = self.console.ask("enter the description (optional): ") or None
        added = self.upsert_item(name, ingredients, item_type, price, description)
        cprint("menu item added" if added else "menu item updated", "green")

    # users
    def _require_user(self, login: str):
        if not self.accounts.user_exists(login):
            raise RecordNotFoundError(f"user '{login}' does not exist")

    def set_user_field(self, target: str, column: str, value: str):
        if column not in ("favoriteItems", "phoneNum"):
            raise InvalidInputError(f"'{column}' cannot be edited")
        self._require_user(target)
        self.db.execute(f"UPDATE Users SET {column}=? WHERE login=?;", (value, target))

    def change_login(self, target: str, new_login: str):
        new_login = truncate(new_login, config.MAX_LOGIN_LENGTH)
        if not new_login:
            raise InvalidInputError("login cannot be empty")
        self._require_user(target)
        if self.accounts.user_exists(new_login):
            raise DuplicateLoginError(new_login)
        self.db.execute("UPDATE Users SET login=? WHERE login=?;", (new_login, target))
        logger.info("login %s renamed to %s", target, new_login)

    def change_role(self, target: str, new_role: Role):
        """managers cannot change another manager's role"""
        # the target's role is read here, not the caller's
        if self.accounts.role_of(target) is Role.MANAGER:
            raise AuthorizationError("this user is a manager, you can't update another manager")
        self.db.execute("UPDATE Users SET role=? WHERE login=?;", (new_role.value, target))
        logger.info("role of %s set to %s", target, new_role.value)

    def update_user(self, login: str):
        self.accounts.require_role(login, Role.MANAGER)
        print("select choice to update:")
        print("1. favorite item\n2. phone number\n3. login\n4. role")
        choice = self.console.choose()
        if choice not in (1, 2, 3, 4):
            cprint("unrecognized choice!", "red"); return
        target = self.console.ask("give the login of the user you want to update: ")
        self._require_user(target)
        if choice == 1:
            value = self.console.ask("give the name of the new favorite item: ")
            self.set_user_field(target, "favoriteItems", value)
        elif choice == 2:
            value = truncate(self.console.ask("give the new phone number: "),
                             config.MAX_PHONE_LENGTH)
            self.set_user_field(target, "phoneNum", value)
        elif choice == 3:
            if target == login:
                raise AuthorizationError("you can't change your own login while logged in")
            self.change_login(target, self.console.ask("give the new login: "))
        else:
            if self.accounts.role_of(target) is Role.MANAGER:
                raise AuthorizationError("this user is a manager, you can't update another manager")
            new_role = Role.parse(self.console.ask("give the new role (customer/driver/manager): "))
            self.change_role(target, new_role)
        cprint("finished update", "green")
