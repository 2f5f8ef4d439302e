#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from menuhub.core.config import DEV_BOOTSTRAP_ALLOW, IS_DEV  # noqa: E402
from menuhub.core.database import SessionLocal, engine  # noqa: E402
from menuhub.core.errors import DomainError  # noqa: E402
from menuhub.services.admin_bootstrap import (  # noqa: E402
    ensure_users_table,
    upsert_admin_user,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or promote a MenuHub administrator.")
    parser.add_argument("--phone", required=True, help="Admin phone number (09XXXXXXXXX)")
    parser.add_argument("--email", required=True, help="Admin email")
    parser.add_argument("--password", help="Admin password (required when creating)")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Run without DEV_BOOTSTRAP_ALLOW=1",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if not DEV_BOOTSTRAP_ALLOW and not args.force:
        print("Admin bootstrap disabled. Set DEV_BOOTSTRAP_ALLOW=1 or pass --force.")
        return 1

    try:
        ensure_users_table(engine)
    except RuntimeError as exc:
        print(str(exc))
        return 1

    db = SessionLocal()
    try:
        admin, created = upsert_admin_user(
            db,
            phone_number=args.phone,
            email=args.email,
            password=args.password,
        )
    except ValueError as exc:
        print(str(exc))
        return 1
    except DomainError as exc:
        print(exc.detail)
        return 1
    finally:
        db.close()

    action = "created" if created else "promoted"
    print(f"Admin {action}: id={admin.id} phone={admin.phone_number} email={admin.email}")
    if IS_DEV:
        password_info = args.password if args.password else "<unchanged>"
        print(f"DEV summary -> Phone: {admin.phone_number} | Email: {admin.email} | Password: {password_info}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
