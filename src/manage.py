"""Storefront management CLI.

Creates and drops relational schemas when an RDBMS provider is configured,
and loads the demo catalog.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Add the demo products
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront
    from storefront.utils.logging import configure_logging

    configure_logging()
    storefront.init()
    return storefront


def setup_databases():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    touched = setup_db(domain)
    print(f"  schema ready on: {', '.join(touched) or 'no relational provider configured'}")


def drop_databases():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    touched = drop_db(domain)
    print(f"  schema dropped on: {', '.join(touched) or 'no relational provider configured'}")


def seed():
    from storefront.catalog.seed import seed_catalog

    domain = _domain()
    with domain.domain_context():
        added = seed_catalog()
    print(f"Seeded {added} demo product(s).")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load the demo catalog")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    elif args.command == "seed":
        seed()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
