"""
Create a user (e.g. the first administrator). Run from project root:
  python -m inkwell.scripts.create_user USERNAME EMAIL PASSWORD [ROLE ...]
Example:
  python -m inkwell.scripts.create_user admin admin@example.com your-secure-password Administrator
"""
import argparse
import logging
import sys

from sqlalchemy import select

from inkwell.core.database import SessionLocal
from inkwell.core.errors import DuplicateEmail, DuplicateUsername, StoreUnavailable
from inkwell.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from inkwell.models import Role, RoleName
from inkwell.services.credentials import CredentialStore
from inkwell.services.rbac import RoleGraph
from inkwell.services.seed import seed_rbac


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Inkwell user (no registration UI).")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "roles",
        nargs="*",
        default=[RoleName.CONTRIBUTOR.value],
        choices=[r.value for r in RoleName],
        help="Roles to grant (default: Contributor)",
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1
    email = args.email.strip()
    if "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s %(message)s")
    db = SessionLocal()
    try:
        seed_rbac(db)
        role_ids = list(db.scalars(select(Role.id).where(Role.name.in_(args.roles))))
        user_id = CredentialStore(db).create(username, email, args.password)
        RoleGraph(db).assign_roles(user_id, role_ids)
        print(f"Created user '{username}' with roles {sorted(set(args.roles))}.")
        return 0
    except (DuplicateEmail, DuplicateUsername) as e:
        print(str(e), file=sys.stderr)
        return 1
    except StoreUnavailable as e:
        print(f"Database error: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
