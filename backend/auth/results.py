# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Outcome of a login attempt.

Callers must tell "try again" apart from "the system is broken", so a login
returns exactly one of three variants instead of overloading ``None`` /
``False`` / exceptions:

* :class:`Success`                – credentials verified, carries the user.
* :class:`AuthenticationRejected` – soft failure, carries a reason code.
* :class:`SystemFailure`          – the data layer failed, carries the cause.
"""

from dataclasses import dataclass
from typing import Any, Union

from core.exceptions import PassportError

# Rejection reasons
EMAIL_NOT_FOUND = "email_not_found"
USERNAME_NOT_FOUND = "username_not_found"
PASSWORD_NOT_SET = "password_not_set"
WRONG_PASSWORD = "wrong_password"


@dataclass(frozen=True)
class Success:
    user: Any
    ok = True


@dataclass(frozen=True)
class AuthenticationRejected:
    reason: str
    ok = False


@dataclass(frozen=True)
class SystemFailure:
    cause: PassportError
    ok = False


AuthResult = Union[Success, AuthenticationRejected, SystemFailure]
