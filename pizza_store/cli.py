"""numbered menu loop and the program entry point"""

import atexit
import logging
import signal
import sys
from functools import partial
from typing import Callable

from termcolor import cprint, colored

from pizza_store import config
from pizza_store.accounts import AccountManager
from pizza_store.admin import AdminManager
from pizza_store.console import Console, safe_int
from pizza_store.database import DatabaseManager, resolve_db_path
from pizza_store.errors import PizzaStoreError, StoreConnectionError
from pizza_store.menu import MenuBrowser
from pizza_store.orders import OrderManager

logger = logging.getLogger(__name__)

USAGE = "usage: pizza-store <dbname> <port> <user>"


# command infrastructure
class MenuOption:
    """bind a menu number to a handler; the handler is the error boundary"""
    def __init__(self, number: int, label: str, function: Callable, exits: bool = False):
        self.number = number
        self.label = label
        self._fn = function
        self.exits = exits

    def run(self):
        """invoke the handler, reporting any failure instead of raising it"""
        try:
            return self._fn()
        except PizzaStoreError as e:
            logger.error("%s failed: %s: %s", self.label, type(e).__name__, e)
            cprint(str(e), "red")
            return None


class MenuLoop:
    """print the options, read a choice, dispatch until an exit option"""
    def __init__(self, title: str, options: list[MenuOption], console: Console):
        self.title = title
        self.options = {o.number: o for o in options}
        self.console = console

    def show(self):
        cprint(self.title, "green", attrs=["bold"])
        cprint("-" * len(self.title), "green")
        for number, option in self.options.items():
            print(f"{colored(str(number), 'blue')}. {option.label}")

    def run_once(self) -> tuple[bool, object]:
        """handle one choice; returns (keep going, handler result)"""
        self.show()
        option = self.options.get(self.console.choose())
        if option is None:
            cprint("unrecognized choice!", "red")
            return True, None
        if option.exits:
            return False, None
        return True, option.run()

    def run(self):
        keep_going = True
        while keep_going:
            keep_going, _ = self.run_once()


# application wiring
class Application:
    """bootstrap the managers and run the two-level menu"""
    def __init__(self, db: DatabaseManager, console: Console):
        self.db = db
        self.console = console
        self.accounts = AccountManager(db, console)
        self.menu = MenuBrowser(db, console)
        self.orders = OrderManager(db, console, self.accounts)
        self.admin = AdminManager(db, console, self.accounts)

    def main_menu(self) -> MenuLoop:
        return MenuLoop("main menu", [
            MenuOption(1, "create user", self.accounts.signup),
            MenuOption(2, "log in", self.accounts.login),
            MenuOption(9, "< exit", lambda: None, exits=True),
        ], self.console)

    def user_menu(self, login: str) -> MenuLoop:
        def bind(fn):
            return partial(fn, login)

        return MenuLoop(f"main menu ({login})", [
            MenuOption(1, "view profile", bind(self.accounts.view_profile)),
            MenuOption(2, "update profile", bind(self.accounts.update_profile)),
            MenuOption(3, "view menu", self.menu.view_menu),
            MenuOption(4, "place order", bind(self.orders.place_order)),
            MenuOption(5, "view full order id history", bind(self.orders.view_all_orders)),
            MenuOption(6, "view past 5 order ids", bind(self.orders.view_recent_orders)),
            MenuOption(7, "view order information", bind(self.orders.view_order_info)),
            MenuOption(8, "view stores", self.menu.view_stores),
            MenuOption(9, "update order status (drivers & managers)", bind(self.orders.update_order_status)),
            MenuOption(10, "update menu (managers)", bind(self.admin.update_menu)),
            MenuOption(11, "update user (managers)", bind(self.admin.update_user)),
            MenuOption(20, "log out", lambda: None, exits=True),
        ], self.console)

    def run(self):
        """main menu; a successful login opens the user menu until log out"""
        main_menu = self.main_menu()
        try:
            keep_going = True
            while keep_going:
                keep_going, result = main_menu.run_once()
                if isinstance(result, str):
                    self.user_menu(result).run()
                    cprint(f"logged out {result}", "green")
        except EOFError:
            print()


def parse_args(args: list[str]) -> tuple[str, int, str] | None:
    """<dbname> <port> <user>, or none if malformed"""
    if len(args) != 3:
        return None
    dbname, raw_port, user = args
    port = safe_int(raw_port, minimum=1)
    if not dbname or port is None or port > 65535:
        return None
    return dbname, port, user


# signal handler
class SignalHandler:
    """custom ctrl+c handler to nag user politely"""
    @staticmethod
    def sigint(_, __):
        """handle ctrl+c"""
        cprint("\nnext time, use exit!", "yellow")
        sys.exit(0)


# entry point
def main(argv: list[str] | None = None):
    """entrypoint wrapper"""
    parsed = parse_args(sys.argv[1:] if argv is None else argv)
    if parsed is None:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    dbname, port, user = parsed

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    signal.signal(signal.SIGINT, SignalHandler.sigint)

    path = resolve_db_path(dbname)
    print(f"connecting to database {path} as {user} (port {port})...")
    try:
        db = DatabaseManager(path)
    except StoreConnectionError as e:
        logger.error(str(e))
        cprint(f"error - {e}", "red")
        sys.exit(1)
    atexit.register(db.close)
    cprint("done", "green")

    cprint("""
*******************************************************
              pizza store user interface
*******************************************************
""", "green", attrs=["bold"])
    Application(db, Console()).run()

    print("disconnecting from database...", end="")
    db.close()
    cprint("done\n\nbye !", "green")
    sys.exit(0)
