#!/usr/bin/env python3
"""Fill correctOptionIndex/correctOptionLetter on legacy questions.

Usage:
    python scripts/backfill_answers.py [--dry-run] [-v]
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.logging import get_logger, setup_logging
from app.db.mongo import get_db
from app.services.backfill import backfill_answer_fields

logger = get_logger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--dry-run", action="store_true", help="Report what would change without writing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args()

    setup_logging("DEBUG" if args.verbose else None)
    report = backfill_answer_fields(get_db(), dry_run=args.dry_run)
    print(
        f"Scanned {report.scanned} questions: {report.updated} "
        f"{'would be ' if args.dry_run else ''}updated, {report.unresolved} unresolved"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
