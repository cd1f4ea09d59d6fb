# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Record-level validation shared by every ORM model.

Models validate attributes on assignment (SQLAlchemy ``@validates``) and
report problems as :class:`ModelValidationError`, keyed by attribute name.
:func:`create_record` adds the checks that need the database:

* ``unique_columns``     – values that must not already exist in the table.
* ``reference_columns``  – foreign-key column → attribute name to report;
  the referenced row must still exist.

so callers get the same error type whether a value is malformed, already
taken or points at a row that has gone away.
"""

import email_validator
from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

# Sites may run on private-network domains (corp.local, intranet.localhost).
# email-validator rejects those names as special-use unless they are taken
# off its list; ".test" is handled by test_environment below.
for _name in ("local", "localhost"):
    if _name in email_validator.SPECIAL_USE_DOMAIN_NAMES:
        email_validator.SPECIAL_USE_DOMAIN_NAMES.remove(_name)


class ModelValidationError(ValueError):
    """
    One or more attributes failed validation.

    ``invalid_attributes`` maps attribute name → short rule name, e.g.
    ``{"email": "unique"}`` or ``{"password": "minLength"}``.
    """

    def __init__(self, model: str, invalid_attributes: dict):
        self.model = model
        self.invalid_attributes = dict(invalid_attributes)
        detail = ", ".join(f"{k}: {v}" for k, v in self.invalid_attributes.items())
        super().__init__(f"{model} failed validation ({detail})")


def require_text(model: str, key: str, value):
    """Reject ``None`` and blank strings; return the value unchanged."""
    if value is None or not str(value).strip():
        raise ModelValidationError(model, {key: "required"})
    return value


def is_email(value: str) -> bool:
    """
    Syntax-only email check.  No DNS lookups, and addresses on private or
    test domains are accepted.
    """
    try:
        validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
        )
    except EmailNotValidError:
        return False
    return True


def _missing_references(db: Session, model, record) -> dict:
    missing = {}
    for column_name, attribute in getattr(model, "reference_columns", {}).items():
        value = getattr(record, column_name)
        if value is None:
            continue
        for fk in model.__table__.c[column_name].foreign_keys:
            target = fk.column
            if db.execute(select(target).where(target == value)).first() is None:
                missing[attribute] = "exists"
    return missing


def create_record(db: Session, model, **values):
    """
    Build, check and flush a new *model* row.

    Attribute validators run while the instance is constructed.  Declared
    references and unique columns are then checked with queries; an
    IntegrityError raised by the flush itself (a race, or a constraint the
    model does not declare) rolls the session back and is reported as a
    validation error on the record.

    The row is flushed, not committed: it gets its primary key and is
    visible to later queries in the same session.
    """
    record = model(**values)

    invalid = _missing_references(db, model, record)
    for column in getattr(model, "unique_columns", ()):
        value = getattr(record, column)
        if value is None:
            continue
        if db.query(model).filter(getattr(model, column) == value).first() is not None:
            invalid[column] = "unique"
    if invalid:
        raise ModelValidationError(model.__name__, invalid)

    db.add(record)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise ModelValidationError(model.__name__, {"record": "constraint"}) from exc
    return record
