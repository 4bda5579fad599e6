"""Seed dev data: an admin user, clubs and players, written through the
audited repositories so a fresh database has an activity trail to browse.

Usage:
    uv run python -m scripts.seed_dev_data [admin_email] [admin_password]

Defaults: admin@leaguedesk.local / admin123. Requires DATABASE_URL and a
migrated database (alembic upgrade head). Prints a bearer token for the admin.
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

import app.infrastructure.persistence.database as database
from app.application.services.mutation_interceptor import MutationInterceptor
from app.core.config import get_settings
from app.infrastructure.persistence.repositories import (
    ClubRepository,
    PlayerRepository,
    UserRepository,
)
from app.infrastructure.security import create_access_token, hash_password
from app.infrastructure.services import ActivityLogDispatcher, ActivityLogWriter
from app.shared.context import RequestContext, request_context

CLUBS = [
    {"name": "Riverside Rovers", "registration_number": "RR-001", "contact_email": "rovers@example.org"},
    {"name": "Hilltop United", "registration_number": "HU-002", "contact_email": "hilltop@example.org"},
]
PLAYERS = [
    ("RR-001", "Asha Verma", "1234 5678 9012", date(2004, 3, 14)),
    ("RR-001", "Dev Patel", "2345 6789 0123", date(2003, 11, 2)),
    ("HU-002", "Meera Nair", "3456 7890 1234", date(2005, 6, 21)),
]


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)
    get_settings.cache_clear()


async def main() -> None:
    _load_env()
    admin_email = sys.argv[1] if len(sys.argv) > 1 else "admin@leaguedesk.local"
    admin_password = sys.argv[2] if len(sys.argv) > 2 else "admin123"

    session_factory = database.get_session_factory()
    if session_factory is None:
        print("DATABASE_URL not configured", file=sys.stderr)
        sys.exit(1)

    dispatcher = ActivityLogDispatcher(ActivityLogWriter(session_factory), mode="background")
    interceptor = MutationInterceptor(dispatcher)
    system = RequestContext(actor_name="seed script", actor_role="system")

    with request_context(system):
        async with session_factory() as session:
            async with session.begin():
                users = UserRepository(session, interceptor)
                admin = await users.get_by_email(admin_email)
                if admin is None:
                    admin = await users.create(
                        {
                            "name": "Association Admin",
                            "email": admin_email,
                            "role": get_settings().admin_role,
                            "hashed_password": hash_password(admin_password),
                        }
                    )
                    print(f"Created admin {admin_email}")

                clubs = ClubRepository(session, interceptor)
                club_ids: dict[str, str] = {}
                for data in CLUBS:
                    club = await clubs.find_unique(
                        {"registration_number": data["registration_number"]}
                    )
                    if club is None:
                        club = await clubs.create(data)
                        print(f"Created club {club.name}")
                    club_ids[club.registration_number or ""] = club.id

                players = PlayerRepository(session, interceptor)
                for reg_no, name, aadhar, born in PLAYERS:
                    existing = await players.list_by_club(club_ids[reg_no])
                    if any(p.name == name for p in existing):
                        continue
                    await players.create(
                        {
                            "name": name,
                            "aadhar_number": aadhar,
                            "date_of_birth": born,
                            "club_id": club_ids[reg_no],
                        }
                    )
                    print(f"Created player {name}")
                admin_id, admin_name, admin_role = admin.id, admin.name, admin.role

    await dispatcher.drain()
    token = create_access_token(
        admin_id, name=admin_name, email=admin_email, role=admin_role
    )
    print(f"Admin bearer token:\n{token}")
    if database.engine is not None:
        await database.engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
