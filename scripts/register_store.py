#!/usr/bin/env python3
"""
Helper script to register or inspect store WhatsApp credentials.

Writes to the SQLite credential store used by the webhook.
Secrets are masked when listing.

Usage:
    python scripts/register_store.py [--db PATH] add STORE_ID --token TOKEN --phone-number-id ID --webhook-secret SECRET
    python scripts/register_store.py [--db PATH] list
"""

import argparse
import os
import sys
from pathlib import Path

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from stores import CredentialStoreError, SQLiteCredentialStore, StoreCredentials


def _mask(secret):
    if not secret:
        return "✗ missing"
    return f"{secret[:4]}…" if len(secret) > 8 else "***"


def add_store(args) -> int:
    store = SQLiteCredentialStore(args.db)
    store.save(
        StoreCredentials(
            store_id=args.store_id,
            access_token=args.token,
            phone_number_id=args.phone_number_id,
            webhook_secret=args.webhook_secret,
        )
    )
    print(f"✓ Store '{args.store_id}' saved to {args.db}")
    return 0


def list_stores(args) -> int:
    store = SQLiteCredentialStore(args.db)
    stores = store.list_stores()

    print(f"Credential Store: {args.db}")
    print(f"Total stores: {len(stores)}")
    print("-" * 80)

    for credentials in stores:
        print(f"\n[{credentials.store_id}]")
        print(f"    Phone number id: {credentials.phone_number_id or '✗ missing'}")
        print(f"    Access token:    {_mask(credentials.access_token)}")
        print(f"    Webhook secret:  {_mask(credentials.webhook_secret)}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Manage store WhatsApp credentials")
    parser.add_argument(
        "--db",
        default=os.getenv("STORE_DB_PATH", "./stores.db"),
        help="Path to SQLite credential database",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Insert or update a store")
    add.add_argument("store_id")
    add.add_argument("--token", required=True, help="Graph API access token")
    add.add_argument("--phone-number-id", required=True, help="WhatsApp phone number id")
    add.add_argument("--webhook-secret", required=True, help="hub.verify_token for the webhook")
    add.set_defaults(handler=add_store)

    lister = subparsers.add_parser("list", help="List registered stores")
    lister.set_defaults(handler=list_stores)

    args = parser.parse_args(argv)
    try:
        return args.handler(args)
    except CredentialStoreError as e:
        print(f"✗ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
