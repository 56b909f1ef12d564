#!/usr/bin/env python3
"""Issue a bearer token for local development.

Usage:
    python scripts/create_dev_token.py user-123
    python scripts/create_dev_token.py user-123 --email dev@example.com --minutes 60
"""

import argparse
import sys
from datetime import timedelta
from pathlib import Path

# Add parent directory to path so we can import from mockprep
sys.path.insert(0, str(Path(__file__).parent.parent))

from mockprep.services.token import create_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a development bearer token")
    parser.add_argument("user_id", help="Value of the token's sub claim")
    parser.add_argument("--email", help="Optional email claim")
    parser.add_argument("--minutes", type=int, help="Lifetime in minutes (default from settings)")
    args = parser.parse_args()

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    print(create_token(args.user_id, email=args.email, expires_delta=expires))


if __name__ == "__main__":
    main()
