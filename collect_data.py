"""
Register Collection Script

Fetches the FMCSA daily register for one date or a date range, extracts
the decision records and stores them in MongoDB.

Usage:
    python collect_data.py                          # today
    python collect_data.py --date 05-JAN-24         # one date
    python collect_data.py --start 01-JAN-24 --end 31-JAN-24
    python collect_data.py --date 05-JAN-24 --no-store --output entries.json

Note: Range collection skips dates already stored in MongoDB, so it is
      safe to resume after interruption.
"""

import argparse
import json
import logging
import sys
from datetime import datetime

from fmcsa_register.api import RegisterPipeline, scrape_register
from fmcsa_register.config import get_app_config
from fmcsa_register.services.storage_service import StorageService


parser = argparse.ArgumentParser(description="Collect FMCSA register entries")
parser.add_argument("--date", help="Register date (DD-MMM-YY), default: today")
parser.add_argument("--start", help="First date of a range (DD-MMM-YY)")
parser.add_argument("--end", help="Last date of a range (DD-MMM-YY)")
parser.add_argument("--no-store", action="store_true", help="Do not write to MongoDB")
parser.add_argument("--force", action="store_true", help="Re-fetch dates already stored")
parser.add_argument("--output", help="Write the single-date response JSON to this file")
args = parser.parse_args()

if bool(args.start) != bool(args.end):
    parser.error("--start and --end must be given together")

print("=" * 80)
print("FMCSA REGISTER COLLECTION")
print("=" * 80)

# === Step 1: Load Configuration ===
print("\n[Step 1] Loading configuration...")
config = get_app_config()
logging.basicConfig(
    level=config.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
print(f"  ✓ Config loaded")
print(f"    - Register: {config.register_url}")
print(f"    - Timeout: {config.request_timeout}s")

# === Step 2: Initialize MongoDB Connection ===
storage = None
if not args.no_store:
    print("\n[Step 2] Connecting to MongoDB...")
    try:
        storage = StorageService()
        storage.create_indexes()
        print(f"  ✓ Connected to MongoDB: {config.mongodb_database}.{config.mongodb_collection}")
    except Exception as e:
        print(f"  ✗ Failed to connect to MongoDB!")
        print(f"    Error: {e}")
        print("    Re-run with --no-store to fetch without saving.")
        sys.exit(1)
else:
    print("\n[Step 2] Storage disabled (--no-store)")

# === Step 3: Initialize Pipeline ===
print("\n[Step 3] Initializing RegisterPipeline...")
pipeline = RegisterPipeline(storage_service=storage)
print(f"  ✓ RegisterPipeline ready")

start_time = datetime.now()

# === Step 4: Collect ===
if args.start:
    print(f"\n[Step 4] Collecting range {args.start} .. {args.end}...")
    stats = pipeline.run_range(args.start, args.end, skip_existing=not args.force)
    elapsed = (datetime.now() - start_time).total_seconds()

    print("\n" + "=" * 80)
    print("RANGE COLLECTION COMPLETE")
    print("=" * 80)
    print(f"\n⏱️  Total Time: {elapsed:.1f} seconds")
    print("\n📊 Statistics:")
    print(f"    ✓ Dates processed: {stats['dates']}")
    print(f"    ✓ Entries extracted: {stats['entries']}")
    print(f"    ⏭️  Skipped (existing): {stats['skipped']}")
    print(f"    ✗ Failed: {stats['failed']}")
    exit_code = 0
else:
    print(f"\n[Step 4] Collecting {args.date or 'today'}...")
    response = scrape_register(args.date, pipeline=pipeline)
    elapsed = (datetime.now() - start_time).total_seconds()

    print("\n" + "=" * 80)
    print("COLLECTION COMPLETE" if response['success'] else "COLLECTION FAILED")
    print("=" * 80)
    print(f"\n⏱️  Total Time: {elapsed:.1f} seconds")
    if response['success']:
        print(f"    ✓ Date: {response['date']}")
        print(f"    ✓ Entries: {response['count']}")
    else:
        print(f"    ✗ Error: {response['error']}")

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(response, f, indent=2)
        print(f"\n💾 Response written to {args.output}")
    exit_code = 0 if response['success'] else 1

pipeline.close()
if storage is not None:
    storage.close()

print("\n" + "=" * 80)
sys.exit(exit_code)
