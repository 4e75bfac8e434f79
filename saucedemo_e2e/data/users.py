"""SauceDemo user credentials used by the login and session fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import ValidationError


@dataclass(frozen=True)
class Credential:
    """A username/password pair with a human-readable description."""

    username: str
    password: str = field(repr=False)
    description: str = ""


USERS: dict[str, Credential] = {
    "STANDARD": Credential("standard_user", "secret_sauce", "Standard user with full access"),
    "LOCKED_OUT": Credential("locked_out_user", "secret_sauce", "User account that is locked out"),
}

INVALID_CREDENTIALS: dict[str, Credential] = {
    "INVALID_PASSWORD": Credential("standard_user", "wrong_password", "Valid username with wrong password"),
}


def get_user(key: str) -> Credential:
    """Return the credential registered under *key* (e.g. ``"STANDARD"``)."""
    try:
        return USERS[key]
    except KeyError:
        valid = ", ".join(USERS)
        raise ValidationError(f'Invalid user type: "{key}". Valid types are: {valid}') from None


STANDARD_USER = USERS["STANDARD"]
