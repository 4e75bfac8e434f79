"""Static test data: credentials and order information."""

from .orders import ORDER_DATA, OrderInfo
from .users import INVALID_CREDENTIALS, STANDARD_USER, USERS, Credential, get_user

__all__ = [
    "Credential",
    "INVALID_CREDENTIALS",
    "ORDER_DATA",
    "OrderInfo",
    "STANDARD_USER",
    "USERS",
    "get_user",
]
