# bazaar/domain/errors.py
"""
Bledy domenowe sklepu.

Kazdy blad ma `kind` (nazwa rodzaju zwracana klientowi) i `status_code`,
ktory warstwa HTTP przepisuje na odpowiedz.
"""


class ShopError(Exception):
    kind = "ShopError"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class NotFound(ShopError):
    kind = "NotFound"
    status_code = 404


class OutOfStock(ShopError):
    kind = "OutOfStock"
    status_code = 409


class EmptyCart(ShopError):
    kind = "EmptyCart"
    status_code = 400


class Unauthenticated(ShopError):
    kind = "Unauthenticated"
    status_code = 401


class StoreUnavailable(ShopError):
    kind = "StoreUnavailable"
    status_code = 503


class ConcurrencyConflict(ShopError):
    kind = "ConcurrencyConflict"
    status_code = 409


class AlreadyExists(ShopError):
    kind = "AlreadyExists"
    status_code = 409


class InvalidCredentials(ShopError):
    kind = "InvalidCredentials"
    status_code = 400


class InvalidRequest(ShopError):
    kind = "InvalidRequest"
    status_code = 400
