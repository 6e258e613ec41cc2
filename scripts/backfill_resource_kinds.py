"""Backfill: resolve the resource kind of file records stored without one.

Older uploads only kept the locator. Downloads heal those rows one at a
time; this script does all of them up front.

Usage:
    python scripts/backfill_resource_kinds.py [--limit N]
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from filedrive.core.config import settings
from filedrive.core.logging_config import setup_logging
from filedrive.database import SessionLocal
from filedrive.services.file_service import FileService
from filedrive.services.object_store import CloudinaryObjectStore


def backfill(limit=None):
    """Resolve and store missing resource kinds. Returns the number updated."""
    db = SessionLocal()
    try:
        updated = FileService(db, CloudinaryObjectStore()).backfill_resource_kinds(limit=limit)
        print(f"Updated {updated} file record(s)")
        return updated
    except Exception as e:
        db.rollback()
        print(f"Error during backfill: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--limit", type=int, default=None, help="Stop after N records")
    args = parser.parse_args()

    setup_logging(log_level=settings.log_level, log_format="text")
    if not settings.object_store_configured:
        print("Cloudinary credentials are missing; set CLOUDINARY_URL first.")
        sys.exit(1)
    backfill(limit=args.limit)
