"""SickFits database management CLI.

Creates and drops the relational schema behind the storefront domain. Only
relational providers (sqlite, postgresql) configured in ``[tool.protean]``
are touched; the default in-memory provider needs no schema.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create database tables for the storefront domain."""
    from sickfits.domain import sickfits
    from sickfits.utils.db import setup_db

    print("Initializing sickfits domain...")
    sickfits.init()
    print("Creating database schema...")
    setup_db(sickfits)
    print("Done.")


def drop_database():
    """Drop database tables for the storefront domain."""
    from sickfits.domain import sickfits
    from sickfits.utils.db import drop_db

    print("Initializing sickfits domain...")
    sickfits.init()
    print("Dropping database schema...")
    drop_db(sickfits)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="SickFits database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
