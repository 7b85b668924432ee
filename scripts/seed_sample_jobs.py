"""Seed open jobs for one company from sample-data/sample_data.csv.

Usage:
    SUPABASE_URL=... SUPABASE_SERVICE_ROLE_KEY=... \
        python scripts/seed_sample_jobs.py --companySlug=acme --limit=5

Credentials: SUPABASE_URL or VITE_SUPABASE_URL, and SUPABASE_SERVICE_ROLE_KEY,
SUPABASE_ANON_KEY or VITE_SUPABASE_ANON_KEY. Pass --sqlite PATH to seed a
local database instead.
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from careerhub.core.config import BackendConfig  # noqa: E402
from careerhub.core.errors import CareerHubError  # noqa: E402
from careerhub.seed.commands import open_backend, seed_sample_jobs  # noqa: E402

CSV_PATH = Path(__file__).parent.parent / "sample-data" / "sample_data.csv"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed sample jobs from CSV")
    parser.add_argument("--companyId", dest="company_id", help="Target company id")
    parser.add_argument("--companySlug", dest="company_slug", help="Target company slug")
    parser.add_argument("--limit", type=int, help="Only seed the first N rows")
    parser.add_argument("--csv", default=str(CSV_PATH), help="CSV file to read")
    parser.add_argument("--sqlite", help="Seed a local SQLite database instead of Supabase")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.sqlite:
            config = BackendConfig(provider="sqlite", sqlite_path=args.sqlite)
        else:
            config = BackendConfig.from_env()
        backend = open_backend(config)
        jobs = seed_sample_jobs(
            backend,
            company_id=args.company_id,
            company_slug=args.company_slug,
            csv_path=args.csv,
            limit=args.limit,
        )
    except (CareerHubError, FileNotFoundError, ValueError) as e:
        print(f"Error seeding sample jobs: {e}", file=sys.stderr)
        sys.exit(1)

    company = args.company_id or args.company_slug
    print(f"Successfully seeded {len(jobs)} jobs for company {company}.")


if __name__ == "__main__":
    main()
