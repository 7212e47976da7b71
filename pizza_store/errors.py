"""error kinds raised by the client; the message is what the user sees"""


class PizzaStoreError(Exception):
    """base for every recoverable failure inside a handler"""


class StoreConnectionError(PizzaStoreError):
    """database could not be opened (fatal at startup)"""


class DuplicateLoginError(PizzaStoreError):
    def __init__(self, login: str):
        super().__init__(f"login '{login}' is already in use")
        self.login = login


class InvalidInputError(PizzaStoreError):
    pass


class InvalidQuantityError(PizzaStoreError):
    def __init__(self, quantity: int):
        super().__init__(f"quantity must be at least 1 (got {quantity})")
        self.quantity = quantity


class AuthorizationError(PizzaStoreError):
    pass


class DataAccessError(PizzaStoreError):
    pass


class RecordNotFoundError(PizzaStoreError):
    pass
