"""
Showcase 01: Stored Register Query Workflow

This showcase demonstrates reading back collected register entries:
1. Collect one register date (live request) into a showcase collection
2. Query stored entries by date range
3. Filter by category and group by category label
4. Clean up showcase data

Requirements:
- MongoDB running on localhost:27017 (or MONGO_HOST)
- Active internet connection
- Collection will be created: register_entries_showcase

Status: Live smoke test with real MongoDB
"""

import sys

import pandas as pd

print("=" * 80)
print("SHOWCASE 01: Stored Register Query Workflow")
print("=" * 80)

# === Step 1: Setup ===

print("\n[Step 1] Importing modules...")
from fmcsa_register.api import RegisterPipeline
from fmcsa_register.config import get_app_config
from fmcsa_register.services.storage_service import StorageService
from fmcsa_register.types import Categories

config = get_app_config()

# Use temporary collection for showcase
COLLECTION = "register_entries_showcase"
DATE = "10-JAN-24"

print(f"  MongoDB URI: {config.mongodb_uri}")
print(f"  Database: {config.mongodb_database}")
print(f"  Collection: {COLLECTION}")

# === Step 2: Initialize Services ===

print("\n[Step 2] Initializing services...")
storage = StorageService(collection=COLLECTION)
storage.collection.delete_many({})
pipeline = RegisterPipeline(storage_service=storage)
print("  ✓ StorageService initialized")
print("  ✓ RegisterPipeline initialized")

# === Step 3: Collect ===

print(f"\n[Step 3] Collecting {DATE}...")
try:
    result = pipeline.run(DATE)
except Exception as e:
    print(f"  ✗ Collection failed: {e}")
    storage.close()
    sys.exit(1)
print(f"  ✓ {result.count} entries extracted and stored")

# === Step 4: Query by Date Range ===

print("\n[Step 4] Querying stored entries for the surrounding week...")
entries = storage.get_entries("08-JAN-24", "12-JAN-24")
print(f"  ✓ {len(entries)} entries between 08-JAN-24 and 12-JAN-24")

df = pd.DataFrame([e.to_dict() for e in entries])
if not df.empty:
    print("\n  Entries per category:")
    for label, count in df.groupby('category').size().items():
        print(f"    - {label}: {count}")

# === Step 5: Filter by Category ===

label = Categories.get_label('REV')
print(f"\n[Step 5] Filtering on category '{label}'...")
revocations = storage.get_entries("08-JAN-24", "12-JAN-24", category=label)
for entry in revocations[:5]:
    print(f"    {entry.number:<12} {entry.decided:<11} {entry.title}")
if len(revocations) > 5:
    print(f"    ... and {len(revocations) - 5} more")

# === Step 6: Cleanup ===

print("\n[Step 6] Cleaning up...")
storage.collection.drop()
pipeline.close()
storage.close()
print("  ✓ Showcase collection dropped")

print("\n" + "=" * 80)
print("SHOWCASE COMPLETE")
print("=" * 80)
