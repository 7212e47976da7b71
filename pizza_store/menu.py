"""menu browsing with optional type / price filters, and the store list"""

from dataclasses import dataclass
from enum import Enum

from termcolor import cprint

from pizza_store.console import Console
from pizza_store.database import DatabaseManager


class ItemType(Enum):
    """matched as a substring of Items.typeOfItem ("drink" also hits "drinks")"""
    ENTREE = "entree"
    DRINK = "drink"
    SIDE = "side"


class PriceSort(Enum):
    NONE = ""
    ASCENDING = "ASC"
    DESCENDING = "DESC"


@dataclass
class MenuFilter:
    item_type: ItemType | None = None
    max_price: float | None = None
    sort: PriceSort = PriceSort.NONE


def build_menu_query(menu_filter: MenuFilter) -> tuple[str, tuple]:
    """compose the Items read query; the first predicate always gets WHERE"""
    clauses: list[str] = []
    params: list = []
    if menu_filter.item_type is not None:
        clauses.append("typeOfItem LIKE ?")
        params.append(f"%{menu_filter.item_type.value}%")
    if menu_filter.max_price is not None:
        clauses.append("price < ?")
        params.append(menu_filter.max_price)
    sql = "SELECT itemName, ingredients, typeOfItem, price, description FROM Items"
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    if menu_filter.sort is not PriceSort.NONE:
        sql += f" ORDER BY price {menu_filter.sort.value}"
    return sql + ";", tuple(params)


class MenuBrowser:
    def __init__(self, db: DatabaseManager, console: Console):
        self.db = db
        self.console = console

    def show(self, menu_filter: MenuFilter) -> int:
        sql, params = build_menu_query(menu_filter)
        count = self.db.query_print(sql, params)
        if not count:
            cprint("no items match", "yellow")
        return count

    def _ask_filter(self) -> MenuFilter:
        menu_filter = MenuFilter()

        print("filter by item type?\n1. yes\n2. no")
        choice = self.console.choose()
        if choice == 1:
            print("which type?\n1. entree\n2. drink\n3. side")
            types = {1: ItemType.ENTREE, 2: ItemType.DRINK, 3: ItemType.SIDE}
            menu_filter.item_type = types.get(self.console.choose())
            if menu_filter.item_type is None:
                cprint("unrecognized choice! showing every type", "yellow")
        elif choice != 2:
            cprint("unrecognized choice!", "yellow")

        print("filter by max price?\n1. yes\n2. no")
        choice = self.console.choose()
        if choice == 1:
            menu_filter.max_price = self.console.ask_float("what price? ")
        elif choice != 2:
            cprint("unrecognized choice!", "yellow")

        print("sort data?\n1. ascending price\n2. descending price\n3. no")
        sorts = {1: PriceSort.ASCENDING, 2: PriceSort.DESCENDING, 3: PriceSort.NONE}
        menu_filter.sort = sorts.get(self.console.choose(), PriceSort.NONE)
        return menu_filter

    def view_menu(self):
        """interactive filter builder; prints the matching items"""
        self.show(self._ask_filter())

    def view_stores(self):
        self.db.query_print("SELECT * FROM Store ORDER BY storeID;")
