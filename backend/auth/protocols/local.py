# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Local authentication protocol – email/username + password.

Three operations:

* :func:`register` – create a user inside a site and give it a local passport.
* :func:`connect`  – give an already signed-in user (e.g. one who arrived via
  a third-party provider) a local password, unless they already have one.
* :func:`login`    – verify an identifier/password pair.

Every operation takes a :class:`auth.context.RequestContext` and the request's
SQLAlchemy session.  User-facing text is written to ``ctx.flash``; errors
raised from here carry only a code (see ``core.exceptions``).

Registration as a unit of work
------------------------------
The user row and its passport are flushed in the same session and committed
together at the end, so a crash between the two inserts persists nothing.
When the passport is rejected the freshly flushed user is removed explicitly
(the compensation step) before the error is raised.  If that removal fails
the session is rolled back and :class:`CompensationFailure` is raised with the
deletion error as its cause; it is never retried or swallowed.
"""

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from auth.context import RequestContext
from auth.results import (
    EMAIL_NOT_FOUND,
    PASSWORD_NOT_SET,
    USERNAME_NOT_FOUND,
    WRONG_PASSWORD,
    AuthenticationRejected,
    AuthResult,
    Success,
    SystemFailure,
)
from core.exceptions import (
    CompensationFailure,
    EmailExists,
    InvalidPassword,
    LookupFailure,
    MissingField,
    MissingSite,
    SiteInvalid,
    SiteMismatch,
    UserExists,
)
from core.logger import get_logger
from models.passport import LOCAL_PROTOCOL, Passport
from models.site import site_id_same_as_email
from models.user import User
from models.validation import ModelValidationError, create_record, is_email

log = get_logger("auth.local")


def _lookup_failed(message: str, exc: Exception) -> SystemFailure:
    failure = LookupFailure(message)
    failure.__cause__ = exc
    return SystemFailure(failure)


def find_local_passport(db: Session, user_id: int):
    return (
        db.query(Passport)
        .filter(Passport.protocol == LOCAL_PROTOCOL, Passport.user_id == user_id)
        .first()
    )


# ---------------------------------------------------------------------------
# register
# ---------------------------------------------------------------------------


def register(ctx: RequestContext, db: Session) -> User:
    """
    Create a user from the submitted ``email``, ``password``, ``firstName``,
    ``lastName``, optional ``username`` and ``site``, plus its local passport.

    Returns the committed User.  Raises a ``PassportError`` subclass on any
    failure, after flashing the matching message.
    """
    email = ctx.param("email")
    password = ctx.param("password")
    site_id = ctx.param("site")

    if isinstance(email, str):
        email = email.strip()
    if not email:
        ctx.flash_message("error", "Error.Passport.Email.Missing")
        raise MissingField("email")

    if not password:
        ctx.flash_message("error", "Error.Passport.Password.Missing")
        raise MissingField("password")

    if not site_id:
        log.warning("registration for %s rejected: no site supplied", email)
        ctx.flash_message("error", "Error.Passport.Site.Missing")
        raise MissingSite("No site id was supplied.")

    try:
        site = site_id_same_as_email(db, email, site_id)
    except SQLAlchemyError as exc:
        db.rollback()
        log.error("site lookup failed for site=%s: %s", site_id, exc)
        raise LookupFailure("Site lookup failed.") from exc

    if site is None:
        ctx.flash_message("error", "Error.Passport.Site.NotFound")
        raise SiteMismatch("Site doesn't match email domain.")

    user = _create_user(ctx, db, site, email)
    _create_local_passport(ctx, db, user, password)

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        log.error("commit of new user %s failed: %s", email, exc)
        raise LookupFailure("Could not save the new user.") from exc

    log.info("registered user id=%s site=%s", user.id, site.id)
    return user


def _create_user(ctx: RequestContext, db: Session, site, email: str) -> User:
    try:
        return create_record(
            db,
            User,
            email=email,
            username=ctx.param("username"),
            first_name=ctx.param("firstName"),
            last_name=ctx.param("lastName"),
            site_id=site.id,
        )
    except ModelValidationError as exc:
        invalid = exc.invalid_attributes
        if "site" in invalid:
            ctx.flash_message("error", "Error.Passport.Site.Missing")
            raise SiteInvalid(str(exc)) from exc
        if "email" in invalid:
            ctx.flash_message("error", "Error.Passport.Email.Exists")
            raise EmailExists(str(exc)) from exc
        ctx.flash_message("error", "Error.Passport.User.Exists")
        raise UserExists(str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise LookupFailure("Could not create the user.") from exc


def _create_local_passport(ctx: RequestContext, db: Session, user: User, password: str) -> Passport:
    try:
        return create_record(
            db,
            Passport,
            protocol=LOCAL_PROTOCOL,
            password=password,
            user_id=user.id,
        )
    except ModelValidationError as exc:
        ctx.flash_message("error", "Error.Passport.Password.Invalid")
        _discard_user(db, user)
        raise InvalidPassword(str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        _discard_user(db, user)
        raise LookupFailure("Could not create the passport.") from exc


def _discard_user(db: Session, user: User) -> None:
    """
    Compensation step: remove a user whose passport could not be created.

    A user already dropped by a session rollback has nothing left to remove.
    """
    if not inspect(user).persistent:
        return

    email = user.email
    log.warning("removing user %s after its passport was rejected", email)
    try:
        db.delete(user)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        log.error("could not remove user %s: %s", email, exc)
        raise CompensationFailure("Could not remove the incomplete user.") from exc


# ---------------------------------------------------------------------------
# connect
# ---------------------------------------------------------------------------


def connect(ctx: RequestContext, db: Session) -> User:
    """
    Attach a local passport with ``password`` to ``ctx.user`` if it has none.

    An existing local passport is left untouched.  Data-layer errors raise
    :class:`LookupFailure`; a rejected password propagates the model's
    ``ModelValidationError`` as is.
    """
    user = ctx.user
    if user is None:
        raise ValueError("connect requires an authenticated user")

    try:
        if find_local_passport(db, user.id) is None:
            create_record(
                db,
                Passport,
                protocol=LOCAL_PROTOCOL,
                password=ctx.param("password"),
                user_id=user.id,
            )
            db.commit()
            log.info("local passport created for user id=%s", user.id)
    except SQLAlchemyError as exc:
        db.rollback()
        log.error("connect failed for user id=%s: %s", user.id, exc)
        raise LookupFailure("Could not connect a local passport.") from exc

    return user


# ---------------------------------------------------------------------------
# login
# ---------------------------------------------------------------------------


def login(ctx: RequestContext, db: Session, identifier: str, password: str) -> AuthResult:
    """
    Resolve *identifier* (email or username) and check *password* against the
    user's local passport.

    Unknown users, missing passports and wrong passwords are soft
    rejections with a flash message; anything the data layer throws comes
    back as :class:`SystemFailure`.
    """
    identifier = (identifier or "").strip()
    by_email = bool(identifier) and is_email(identifier)

    try:
        if by_email:
            user = db.query(User).filter(User.email == identifier.lower()).first()
        elif identifier:
            user = db.query(User).filter(User.username == identifier).first()
        else:
            user = None
    except SQLAlchemyError as exc:
        log.error("user lookup failed: %s", exc)
        return _lookup_failed("User lookup failed.", exc)

    if user is None:
        if by_email:
            ctx.flash_message("error", "Error.Passport.Email.NotFound")
            return AuthenticationRejected(EMAIL_NOT_FOUND)
        ctx.flash_message("error", "Error.Passport.Username.NotFound")
        return AuthenticationRejected(USERNAME_NOT_FOUND)

    try:
        passport = find_local_passport(db, user.id)
    except SQLAlchemyError as exc:
        log.error("passport lookup failed for user id=%s: %s", user.id, exc)
        return _lookup_failed("Passport lookup failed.", exc)

    if passport is None:
        ctx.flash_message("error", "Error.Passport.Password.NotSet")
        return AuthenticationRejected(PASSWORD_NOT_SET)

    try:
        valid = passport.validate_password(password)
    except ValueError as exc:
        log.error("unreadable password hash on passport id=%s: %s", passport.id, exc)
        return _lookup_failed("Password verification failed.", exc)

    if not valid:
        ctx.flash_message("error", "Error.Passport.Password.Wrong")
        return AuthenticationRejected(WRONG_PASSWORD)

    return Success(user)
