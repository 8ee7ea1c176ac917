"""
Name: Development Session Token Script

Responsibilities:
  - Mint a session token for one of the seeded demo users (or an explicit
    user id/email/role) so the API can be exercised without the auth provider
  - Print the token plus a ready-to-use Authorization header

Notes:
  - The API resolves the user from its own store, so the id must exist there
    (DEV_SEED_DEMO=true seeds demo-admin, demo-pm, demo-finance, demo-employee)
"""

from __future__ import annotations

import argparse
import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from promsys.crosscutting.config import get_settings  # noqa: E402
from promsys.domain.entities import User  # noqa: E402
from promsys.domain.roles import UserRole  # noqa: E402
from promsys.identity.auth import create_session_token  # noqa: E402

DEMO_USERS: dict[str, tuple[str, str, UserRole]] = {
    "admin": ("demo-admin", "admin@promsys.local", UserRole.ADMIN),
    "pm": ("demo-pm", "pm@promsys.local", UserRole.PROJECTMANAGER),
    "finance": ("demo-finance", "finance@promsys.local", UserRole.FINANCE),
    "employee": ("demo-employee", "employee@promsys.local", UserRole.EMPLOYEES),
}


def _parse_args() -> argparse.Namespace:
    argv = sys.argv[1:]
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Issue a development session token."
    )
    parser.add_argument(
        "--demo",
        choices=sorted(DEMO_USERS),
        help="Seeded demo user to sign in as",
    )
    parser.add_argument("--user-id", help="Explicit user id (overrides --demo)")
    parser.add_argument("--email", default="", help="Email claim")
    parser.add_argument("--role", help="Role claim (ADMIN, PROJECTMANAGER, ...)")
    parser.add_argument(
        "--ttl-minutes",
        type=int,
        default=None,
        help="Token lifetime (defaults to SESSION_TTL_MINUTES)",
    )
    return parser.parse_args(argv)


def _resolve_user(args: argparse.Namespace) -> User:
    if args.user_id:
        role = UserRole.parse(args.role)
        if role is None:
            raise SystemExit("--role is required with --user-id.")
        return User(id=args.user_id, name=args.user_id, email=args.email, role=role)

    if not args.demo:
        raise SystemExit("Pass --demo or --user-id.")
    user_id, email, role = DEMO_USERS[args.demo]
    return User(id=user_id, name=args.demo, email=email, role=role)


def main() -> None:
    args = _parse_args()
    settings = get_settings()
    if settings.is_production():
        raise SystemExit("Refusing to mint tokens in production.")

    user = _resolve_user(args)
    token = create_session_token(user, ttl_minutes=args.ttl_minutes)

    print(f"User: {user.id} ({user.role.value})")
    print(f"Cookie: {settings.session_cookie_name}={token}")
    print(f"Authorization: Bearer {token}")


if __name__ == "__main__":
    main()
