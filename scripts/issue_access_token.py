"""Utility script to sign a development access token for the notification API."""

from __future__ import annotations

import argparse
from datetime import timedelta

from notification_service.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for token creation."""

    parser = argparse.ArgumentParser(
        description="Sign a bearer token accepted by the notification endpoints.",
    )
    parser.add_argument("user_id", help="Identifier placed in the token's id claim")
    parser.add_argument(
        "--role",
        default="customer",
        help="Role claim of the token (default: customer; use admin for full access)",
    )
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    expires = timedelta(minutes=args.minutes) if args.minutes else None
    token = create_access_token({"id": args.user_id, "role": args.role}, expires)
    print(token)


if __name__ == "__main__":
    main()
