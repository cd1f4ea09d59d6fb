# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Message catalogue for user-visible flash text.

Keys are dotted message ids (``Error.Passport.Email.Missing``); only an
English catalogue ships.  Unknown keys translate to themselves so a missing
entry is visible instead of silently blank.
"""

MESSAGES = {
    "Error.Passport.Email.Missing": "You didn't enter an email address.",
    "Error.Passport.Password.Missing": "You didn't enter a password.",
    "Error.Passport.Site.Missing": "You didn't select a site.",
    "Error.Passport.Site.NotFound": "Your email address does not belong to the selected site.",
    "Error.Passport.Email.Exists": "That email address is invalid or already in use.",
    "Error.Passport.User.Exists": "That username is already in use.",
    "Error.Passport.Password.Invalid": "That password is too short.",
    "Error.Passport.Email.NotFound": "No account is registered with that email address.",
    "Error.Passport.Username.NotFound": "No account is registered with that username.",
    "Error.Passport.Password.NotSet": "This account has no password set.",
    "Error.Passport.Password.Wrong": "Wrong password.",
}


def translate(key: str) -> str:
    return MESSAGES.get(key, key)
