"""Create a staff account for the carnival admin pages.

Usage: uv run python bin/register-staff.py <email> [--super-admin]

The password is read from the terminal (or AUTH_NEW_STAFF_PASSWORD when set,
for scripted setups). Staff see the games assigned to their email in the
roster; super admins manage every game.
"""

import argparse
import asyncio
import getpass
import os
import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from shared.auth.models import StaffRole
from shared.auth.password import get_hasher
from shared.auth.service import AuthError, AuthService
from shared.auth.settings import AuthSettings
from shared.db import Database, SqliteStaffRepository


def _read_password() -> str:
    password = os.environ.get("AUTH_NEW_STAFF_PASSWORD")
    if password:
        return password
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Confirm password: "):
        print("Error: passwords do not match")
        sys.exit(1)
    return password


async def main() -> None:
    parser = argparse.ArgumentParser(description="Create a carnival staff account")
    parser.add_argument("email", help="Staff email; must match the roster to own a game")
    parser.add_argument(
        "--super-admin",
        action="store_true",
        help="Allow this account to manage and assign every game",
    )
    args = parser.parse_args()

    auth_settings = AuthSettings()
    role = StaffRole.SUPER_ADMIN if args.super_admin else StaffRole.STAFF
    password = _read_password()

    db = Database(auth_settings.database_path)
    db.connect()

    try:
        staff_repo = SqliteStaffRepository(db)
        auth_service = AuthService(staff_repo, password_hasher=get_hasher(auth_settings.password_hasher))

        try:
            account = await auth_service.register_staff(args.email, password, role)
        except AuthError as e:
            print(f"Error: {e}")
            sys.exit(1)

        print(f"Staff registered: {account.email} (id: {account.user_id}, role: {account.role})")
    finally:
        db.close()


if __name__ == "__main__":
    asyncio.run(main())
