"""Storefront management CLI.

Creates and drops the database schema, and grants roles to existing users.

Usage:
    python src/manage.py setup-db                            # Create all tables
    python src/manage.py drop-db                             # Drop all tables
    python src/manage.py promote admin@example.com           # Make a user ADMIN
    python src/manage.py promote user@example.com --role USER
"""

import argparse
import sys


def setup_database():
    """Create the storefront database schema."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    """Drop the storefront database schema."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def promote(email, role):
    """Change the role of the user registered under ``email``."""
    from protean.exceptions import ObjectNotFoundError
    from storefront.domain import storefront
    from storefront.user.registration import ChangeUserRole

    storefront.init()
    with storefront.domain_context():
        try:
            storefront.process(ChangeUserRole(email=email, role=role), asynchronous=False)
        except ObjectNotFoundError:
            print(f"No user registered with {email}.")
            sys.exit(1)
    print(f"{email} is now {role}.")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    promote_parser = subparsers.add_parser("promote", help="Change a user's role")
    promote_parser.add_argument("email", help="Email of an existing user")
    promote_parser.add_argument("--role", choices=["USER", "ADMIN"], default="ADMIN")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "promote":
        promote(args.email, args.role)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
