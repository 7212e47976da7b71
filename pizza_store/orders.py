"""order placement, order history and status updates"""

import logging
from dataclasses import dataclass

from termcolor import cprint

from pizza_store import config
from pizza_store.accounts import AccountManager, Role, STAFF_ROLES
from pizza_store.console import Console, color_money
from pizza_store.database import DatabaseManager
from pizza_store.errors import (
    InvalidInputError,
    InvalidQuantityError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)

ORDER_COLUMNS = "orderID, login, storeID, totalPrice, orderTimestamp, orderStatus"


def escape_like(value: str) -> str:
    """escape LIKE wildcards so user text only matches literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class LineItem:
    """one item of an order, priced at lookup time"""
    item_name: str
    quantity: int
    price: float

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


def order_total(items: list[LineItem]) -> float:
    """sum of price * quantity over every line item"""
    return round(sum(i.subtotal for i in items), 2)


class OrderManager:
    def __init__(self, db: DatabaseManager, console: Console, accounts: AccountManager):
        self.db = db
        self.console = console
        self.accounts = accounts

    # lookups
    def store_exists(self, store_id: int) -> bool:
        return self.db.query_count(
            "SELECT storeID FROM Store WHERE storeID=?;", (store_id,)
        ) != 0

    def find_item(self, name: str) -> tuple[str, float]:
        """first item whose name starts with `name` -> (itemName, price)"""
        if not name:
            raise InvalidInputError("item name cannot be empty")
        rows = self.db.query_rows(
            """--sql
            SELECT itemName, price FROM Items
            WHERE itemName LIKE ? ESCAPE '\\'
            ORDER BY itemName
            LIMIT 1;
            """,
            (escape_like(name) + "%",)
        )
        if not rows:
            raise RecordNotFoundError(f"no menu item named '{name}'")
        return rows[0][0], float(rows[0][1])

    def price_line_items(self, requested: list[tuple[str, int]]) -> list[LineItem]:
        """resolve (name, quantity) pairs to priced line items

        repeated items are merged so each item appears once per order.
        """
        merged: dict[str, LineItem] = {}
        for name, quantity in requested:
            if quantity <= 0:
                raise InvalidQuantityError(quantity)
            item_name, price = self.find_item(name)
            if item_name in merged:
                merged[item_name].quantity += quantity
            else:
                merged[item_name] = LineItem(item_name, quantity, price)
        return list(merged.values())

    # writes
    def create_order(self, login: str, store_id: int, items: list[LineItem]) -> int:
        """insert the order header and its line items as one unit"""
        if not items:
            raise InvalidInputError("an order needs at least one item")
        if not self.store_exists(store_id):
            raise RecordNotFoundError(f"store #{store_id} does not exist")
        with self.db.transaction():
            order_id = self.db.insert(
                "INSERT INTO FoodOrder(login, storeID, totalPrice, orderStatus) VALUES(?,?,?,?);",
                (login, store_id, order_total(items), config.DEFAULT_ORDER_STATUS)
            )
            for item in items:
                self.db.execute(
                    "INSERT INTO ItemsInOrder(orderID, itemName, quantity) VALUES(?,?,?);",
                    (order_id, item.item_name, item.quantity)
                )
        logger.info("order #%s placed by %s (%d items)", order_id, login, len(items))
        return order_id

    # interactive handlers
    def place_order(self, login: str) -> int | None:
        """prompt for a store and items, confirm the total, then create the order"""
        store_id = self.console.ask_int("enter the storeID of the store you wish to order from: ")
        if not self.store_exists(store_id):
            raise RecordNotFoundError(f"store #{store_id} does not exist")

        requested: list[tuple[str, int]] = []
        while True:
            name = self.console.ask("give the item name you wish to add: ")
            quantity = self.console.ask_int("give the number of the item you wish to add: ")
            if quantity <= 0:
                raise InvalidQuantityError(quantity)
            requested.append((name, quantity))
            print("add more items?\n1. order more\n2. finish ordering")
            if self.console.choose() == 2:
                break

        items = self.price_line_items(requested)
        for item in items:
            print(f"{item.quantity} x {item.item_name} @ {color_money(item.price)}")
        print(f"total price: {color_money(order_total(items))}")
        if not self.console.confirm("confirm order?"):
            return None
        order_id = self.create_order(login, store_id, items)
        cprint(f"order #{order_id} placed", "green")
        return order_id

    def view_all_orders(self, login: str, limit: int | None = None):
        """customers see their own order ids; staff see every order"""
        if self.accounts.role_of(login) is Role.CUSTOMER:
            sql = "SELECT orderID FROM FoodOrder WHERE login=?"
            params: tuple = (login,)
        else:
            sql = f"SELECT {ORDER_COLUMNS} FROM FoodOrder"
            params = ()
        sql += " ORDER BY orderTimestamp DESC, orderID DESC"
        if limit is not None:
            sql += " LIMIT ?"
            params += (limit,)
        if not self.db.query_print(sql + ";", params):
            cprint("no orders found", "yellow")

    def view_recent_orders(self, login: str):
        self.view_all_orders(login, limit=config.RECENT_ORDER_LIMIT)

    def view_order_info(self, login: str):
        """print one order and its line items"""
        order_id = self.console.ask_int("specify the orderID of the order you want to view: ")
        sql = f"SELECT {ORDER_COLUMNS} FROM FoodOrder WHERE orderID=?"
        params: tuple = (order_id,)
        if self.accounts.role_of(login) is Role.CUSTOMER:
            sql += " AND login=?"
            params += (login,)
        if self.db.query_print(sql + ";", params) == 0:
            raise RecordNotFoundError(f"order #{order_id} does not exist")
        print()
        self.db.query_print(
            "SELECT itemName, quantity FROM ItemsInOrder WHERE orderID=? ORDER BY itemName;",
            (order_id,)
        )

    # status lives on FoodOrder.orderStatus, keyed by orderID; Items has no
    # status column and is never touched here
    def update_order_status(self, login: str):
        """drivers and managers set any free-text status on an order"""
        self.accounts.require_role(login, *STAFF_ROLES)
        order_id = self.console.ask_int("enter the orderID: ")
        if not self.db.query_count("SELECT orderID FROM FoodOrder WHERE orderID=?;", (order_id,)):
            raise RecordNotFoundError(f"order #{order_id} does not exist")
        status = self.console.ask("enter the new order status: ")
        self.set_order_status(order_id, status)
        cprint("finished update", "green")

    def set_order_status(self, order_id: int, status: str):
        updated = self.db.execute(
            "UPDATE FoodOrder SET orderStatus=? WHERE orderID=?;", (status, order_id)
        )
        if not updated:
            raise RecordNotFoundError(f"order #{order_id} does not exist")
        logger.info("order #%s status -> %s", order_id, status)
