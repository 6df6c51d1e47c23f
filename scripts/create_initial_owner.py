"""Utility script to make sure the directory has its first owner."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from campus_notify.application.use_cases.users import ensure_initial_owner
from campus_notify.infrastructure.database import SessionLocal, initialize_database
from campus_notify.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for owner creation."""

    parser = argparse.ArgumentParser(
        description="Create or elevate the first owner of the notification service.",
    )
    parser.add_argument(
        "--name",
        default="Portal Owner",
        help="Full name used when the account has to be created (default: Portal Owner)",
    )
    parser.add_argument(
        "--email",
        required=True,
        help="Email of the account that becomes the owner",
    )
    parser.add_argument(
        "--print-token",
        action="store_true",
        help="Also print a bearer token for the owner",
    )
    return parser.parse_args()


def main() -> None:
    """Create the owner using the provided command line arguments."""

    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        owner, changed = ensure_initial_owner(session, name=args.name, email=args.email)
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not bootstrap the owner: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error while saving the owner: {exc}") from exc
    else:
        headline = "Owner ready" if changed else "Owner already configured"
        print(
            f"{headline}:\n"
            f"  ID: {owner.id}\n"
            f"  Name: {owner.name}\n"
            f"  Email: {owner.email}"
        )
        if args.print_token:
            print(f"  Token: {create_access_token({'sub': str(owner.id)})}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
