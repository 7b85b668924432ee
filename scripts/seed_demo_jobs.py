"""Seed demo jobs into two companies (40 and 30 roles).

Usage:
    SUPABASE_URL=... SUPABASE_SERVICE_ROLE_KEY=... \
    SEED_COMPANY1_SLUG=first-company SEED_COMPANY2_SLUG=second-company \
        python scripts/seed_demo_jobs.py
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from careerhub.core.config import BackendConfig  # noqa: E402
from careerhub.core.errors import CareerHubError  # noqa: E402
from careerhub.seed.commands import (  # noqa: E402
    open_backend,
    require_env,
    seed_demo_jobs,
    service_role_config,
)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed demo jobs for two companies")
    parser.add_argument("--sqlite", help="Seed a local SQLite database instead of Supabase")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.sqlite:
            config = BackendConfig(provider="sqlite", sqlite_path=args.sqlite)
        else:
            config = service_role_config()
        slug1 = require_env("SEED_COMPANY1_SLUG")
        slug2 = require_env("SEED_COMPANY2_SLUG")
        counts = seed_demo_jobs(open_backend(config), slug1, slug2)
    except (CareerHubError, ValueError) as e:
        print(f"Error seeding demo jobs: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Successfully seeded {sum(counts.values())} jobs across companies:")
    for slug, count in counts.items():
        print(f"- {slug}: {count} jobs")


if __name__ == "__main__":
    main()
