# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the first site so users can register.

Run once after the initial migration:
    python bin/seed_site.py

The script reads FIRST_SITE_NAME and FIRST_SITE_DOMAIN from etc/app.conf.
Registration only accepts email addresses under a site's domain, so without
at least one site nobody can sign up.
"""

import sys
import os

# ---------------------------------------------------------------------------
# Path setup so backend modules are importable
# ---------------------------------------------------------------------------
# bin/seed_site.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from core.config import settings                     # noqa: E402
from core.logger import get_logger                   # noqa: E402
from database import SessionLocal                    # noqa: E402
from models.site import Site                         # noqa: E402
from models.validation import ModelValidationError, create_record  # noqa: E402

log = get_logger("seed")


def seed(db) -> Site | None:
    """Create the configured site unless its domain is already registered."""
    if not settings.first_site_name or not settings.first_site_domain:
        log.warning("FIRST_SITE_NAME or FIRST_SITE_DOMAIN not set in etc/app.conf – nothing to do.")
        return None

    try:
        site = create_record(
            db,
            Site,
            name=settings.first_site_name,
            domain=settings.first_site_domain,
        )
    except ModelValidationError as exc:
        if exc.invalid_attributes.get("domain") == "unique":
            log.info("Site for '%s' already exists – skipping.", settings.first_site_domain)
            return None
        raise
    db.commit()
    log.info("Site '%s' (%s) created with id=%s.", site.name, site.domain, site.id)
    return site


def main():
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
