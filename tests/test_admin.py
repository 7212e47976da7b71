import pytest

from pizza_store.accounts import Role
from pizza_store.orders import LineItem
from pizza_store.errors import (
    AuthorizationError,
    DuplicateLoginError,
    InvalidInputError,
    RecordNotFoundError,
)


@pytest.mark.parametrize("handler", ["update_menu", "update_user"])
@pytest.mark.parametrize("role", ["customer", "driver"])
def test_non_managers_are_refused(admin, script, db, users, handler, role):
    """No prompt is read and nothing is written"""
    script.feed("Calzone", "dough", "entree", "9", "")
    before = db.conn.total_changes

    with pytest.raises(AuthorizationError):
        getattr(admin, handler)(users[role])
    assert db.conn.total_changes == before
    assert len(script.lines) == 5


def test_update_menu_adds_item(admin, script, db, users):
    script.feed("Calzone", "dough,cheese", "entree", "11.5", "")
    admin.update_menu("mona")
    rows = db.query_rows("SELECT ingredients, typeOfItem, price, description FROM Items WHERE itemName = 'Calzone';")
    assert rows == [["dough,cheese", "entree", "11.5", None]]


def test_update_menu_updates_existing_item(admin, script, db, users):
    script.feed("Cola", "soda,ice", "drinks", "2.25", "now with ice")
    admin.update_menu("mona")
    rows = db.query_rows("SELECT ingredients, price, description FROM Items WHERE itemName = 'Cola';")
    assert rows == [["soda,ice", "2.25", "now with ice"]]
    assert db.query_count("SELECT * FROM Items;") == 7


def test_upsert_rejects_bad_price(admin):
    with pytest.raises(InvalidInputError):
        admin.upsert_item("Cola", "soda", "drinks", 0)


def test_update_menu_bad_price(admin, script, users):
    script.feed("Cola", "soda", "drinks", "free", "")
    with pytest.raises(InvalidInputError):
        admin.update_menu("mona")


def test_update_user_fields(admin, script, db, users):
    script.feed("1", "carol", "Garlic Bread")
    admin.update_user("mona")
    script.feed("2", "carol", "555-4242")
    admin.update_user("mona")

    rows = db.query_rows("SELECT favoriteItems, phoneNum FROM Users WHERE login = 'carol';")
    assert rows == [["Garlic Bread", "555-4242"]]


def test_update_user_missing_target(admin, script, users):
    script.feed("1", "nobody")
    with pytest.raises(RecordNotFoundError):
        admin.update_user("mona")


def test_change_login_cascades_to_orders(admin, orders, db, users):
    order_id = orders.create_order("carol", 1, [LineItem("Cola", 1, 2.0)])
    admin.change_login("carol", "caroline")

    assert db.query_rows("SELECT login FROM FoodOrder WHERE orderID = ?;", (order_id,)) == [["caroline"]]


def test_change_login_duplicate(admin, script, users):
    script.feed("3", "carol", "dave")
    with pytest.raises(DuplicateLoginError):
        admin.update_user("mona")


def test_change_role_of_customer(admin, script, accounts, users):
    script.feed("4", "carol", "driver")
    admin.update_user("mona")
    assert accounts.role_of("carol") is Role.DRIVER


def test_cannot_change_another_managers_role(admin, script, db, users):
    """The target's own role is what gets checked"""
    db.execute("INSERT INTO Users(login, password, role) VALUES('max', 'pw', 'manager');")
    script.feed("4", "max", "customer")
    before = db.conn.total_changes

    with pytest.raises(AuthorizationError):
        admin.update_user("mona")
    assert db.conn.total_changes == before

    with pytest.raises(AuthorizationError):
        admin.change_role("max", Role.CUSTOMER)


def test_change_role_rejects_unknown_role(admin, script, users):
    script.feed("4", "carol", "owner")
    with pytest.raises(InvalidInputError):
        admin.update_user("mona")


def test_set_user_field_only_profile_columns(admin, users):
    with pytest.raises(InvalidInputError):
        admin.set_user_field("carol", "password", "x")


def test_manager_cannot_rename_self(admin, script, db, users):
    script.feed("3", "mona", "mona2")
    before = db.conn.total_changes

    with pytest.raises(AuthorizationError):
        admin.update_user("mona")
    assert db.conn.total_changes == before
    assert db.query_count("SELECT * FROM Users WHERE login = 'mona';") == 1


def test_session_survives_refused_self_rename(app, script, users, capsys):
    script.feed("2", "mona", "pw", "11", "3", "mona", "1", "20", "9")
    app.run()

    out = capsys.readouterr().out
    assert "can't change your own login" in out
    assert "does not exist" not in out
    assert "login\trole\tfavoriteItems\tphoneNum" in out


@pytest.mark.parametrize("raw", ["inf", "nan"])
def test_update_menu_rejects_non_finite_price(admin, script, db, users, raw):
    script.feed("Caviar Pizza", "caviar", "entree", raw, "")
    with pytest.raises(InvalidInputError):
        admin.update_menu("mona")
    assert db.query_count("SELECT * FROM Items WHERE itemName = 'Caviar Pizza';") == 0


def test_upsert_rejects_infinite_price(admin):
    with pytest.raises(InvalidInputError):
        admin.upsert_item("Caviar Pizza", "caviar", "entree", float("inf"))
