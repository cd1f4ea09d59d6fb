# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Error taxonomy of the local credential protocol.

Every error carries a stable machine ``code`` and nothing else; the
human-readable text travels separately through the flash sink so that the
same error can be rendered in whatever language the request asked for.

Soft authentication failures (unknown user, wrong password, ...) are *not*
exceptions – see ``auth.results``.
"""


class PassportError(Exception):
    """Base class.  ``code`` identifies the failure for routers and clients."""

    code = "passport_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)


# -- Terminal input errors (no side effects) --------------------------------


class MissingField(PassportError):
    code = "missing_field"

    def __init__(self, field: str):
        super().__init__(f"No {field} was entered.")
        self.field = field


class MissingSite(PassportError):
    code = "missing_site"


class SiteMismatch(PassportError):
    code = "site_mismatch"


# -- Validation raised by the model layer during registration ---------------


class RegistrationValidation(PassportError):
    """User or passport creation was rejected by model validation."""

    code = "validation"


class SiteInvalid(RegistrationValidation):
    code = "site_invalid"


class EmailExists(RegistrationValidation):
    code = "email_exists"


class UserExists(RegistrationValidation):
    code = "user_exists"


class InvalidPassword(RegistrationValidation):
    code = "invalid_password"


# -- Data layer failures ----------------------------------------------------


class CompensationFailure(PassportError):
    """Deleting an orphaned user after a passport failure did not succeed."""

    code = "compensation_failure"


class LookupFailure(PassportError):
    """Unexpected data-layer error; never downgraded to a soft failure."""

    code = "lookup_failure"
