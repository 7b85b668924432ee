"""Patch seeded demo jobs: drop "#n" title suffixes and apply catalogue salaries.

Usage:
    SUPABASE_URL=... SUPABASE_SERVICE_ROLE_KEY=... \
    SEED_COMPANY1_SLUG=first-company SEED_COMPANY2_SLUG=second-company \
        python scripts/fix_seeded_jobs.py
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
    patch_company_jobs,
    require_env,
    resolve_company,
    service_role_config,
)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Patch seeded demo jobs")
    parser.add_argument("--sqlite", help="Patch a local SQLite database instead of Supabase")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.sqlite:
            config = BackendConfig(provider="sqlite", sqlite_path=args.sqlite)
        else:
            config = service_role_config()
        slugs = [require_env("SEED_COMPANY1_SLUG"), require_env("SEED_COMPANY2_SLUG")]
        backend = open_backend(config)
        for slug in slugs:
            company = resolve_company(backend, slug)
            count = patch_company_jobs(backend, company)
            print(f"Patched {count} jobs for {company.slug}")
    except (CareerHubError, ValueError) as e:
        print(f"Error patching seeded jobs: {e}", file=sys.stderr)
        sys.exit(1)

    print("Job titles and salaries updated successfully.")


if __name__ == "__main__":
    main()
