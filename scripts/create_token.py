#!/usr/bin/env python3

"""
Development helper: register a user in the directory and print a bearer token for it.
Real token issuance lives outside this service.

Usage: python scripts/create_token.py USER_ID "Display Name" [--days N]
"""

import os
import sys
import argparse
import logging
from datetime import timedelta

# Add parent directory to path to import app modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.security import create_access_token
from app.db.init_db import create_all_tables
from app.db.session import SessionLocal
from app.modules.user_management.schemas.user import UserCreate
from app.modules.user_management.services.user import upsert_user

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def main():
    parser = argparse.ArgumentParser(description="Create a development access token")
    parser.add_argument("user_id", help="User ID to put in the token subject")
    parser.add_argument("name", help="Display name stamped on the user's posts and comments")
    parser.add_argument("--days", type=int, default=7, help="Token lifetime in days (default: 7)")
    args = parser.parse_args()

    create_all_tables()

    db = SessionLocal()
    try:
        user = upsert_user(db, UserCreate(id=args.user_id, name=args.name))
        logger.info(f"User {user.id} registered as '{user.name}'")
    except Exception as e:
        db.rollback()
        logger.error(f"Could not register user: {e}")
        raise
    finally:
        db.close()

    print(create_access_token(args.user_id, expires_delta=timedelta(days=args.days)))

if __name__ == "__main__":
    main()
