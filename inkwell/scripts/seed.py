"""
Seed the permission catalogue and built-in roles. Safe to run repeatedly:

  python -m inkwell.scripts.seed
"""

import logging
import sys

from inkwell.core.database import SessionLocal
from inkwell.services.seed import seed_rbac

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Insert missing permissions, roles and default grants."""
    db = SessionLocal()
    try:
        inserted = seed_rbac(db)
        logger.info("Seed completed: %s", inserted)
        return 0
    except Exception as e:
        db.rollback()
        logger.exception("Seed failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
