"""CLI script to seed the backend DB from a JSON fixtures file.
Usage: python scripts/seed_data.py [--file fixtures.json] [--admin EMAIL ...]

The fixtures file maps collection names (`ucsbdates`, `menuitemreview`,
`recommendationrequest`, `ucsborganization`, `ucsbdiningcommons`) to
lists of camelCase objects, the same shape the API returns.
"""
import sys
import argparse
import json
import pathlib
from typing import List, Optional
# Ensure `backend/` is on sys.path so `courseapp` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from sqlmodel import Session
from courseapp.database import engine, create_db_and_tables
from courseapp import services


def main(fixtures: Optional[pathlib.Path] = None, admins: Optional[List[str]] = None) -> int:
    """Load `fixtures` (if given) and promote each email in `admins`.

    Returns a process exit code; problems are printed to stdout for a
    quick CLI feedback loop.
    """
    create_db_and_tables()
    with Session(engine) as session:
        if fixtures is not None:
            if not fixtures.exists():
                print(f'Fixtures file not found at {fixtures}')
                return 1
            try:
                data = json.loads(fixtures.read_text(encoding='utf-8'))
                counts = services.FixtureService(session).load(data)
            except ValueError as e:
                print(f'Error loading {fixtures}: {e}')
                return 1
            for name, count in counts.items():
                print(f'Loaded {count} rows into {name}')
        auth = services.AuthService(session)
        for email in admins or []:
            try:
                user = auth.set_admin(email)
            except LookupError as e:
                print(e)
                return 1
            print(f'Granted ADMIN to {user.email}')
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--file', type=pathlib.Path, help='JSON fixtures file to load')
    parser.add_argument('--admin', action='append', default=[], help='Email of a registered user to promote to ADMIN')
    args = parser.parse_args()
    sys.exit(main(fixtures=args.file, admins=args.admin))
