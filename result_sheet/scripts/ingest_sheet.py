# result_sheet/scripts/ingest_sheet.py
"""
Ingest a result sheet image from disk into MongoDB, without the HTTP layer.

    python -m result_sheet.scripts.ingest_sheet sheet.png --semester 1 --year 2 --recalculate
"""
import argparse
import asyncio
import sys
from pathlib import Path

from result_sheet.core.database import get_results_collection
from result_sheet.core.errors import ResultSheetError
from result_sheet.services.result_ingest import recalculate_all, submit_sheet
from result_sheet.services.result_store import MongoResultStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Ingest a scanned result sheet")
    parser.add_argument("image", type=Path)
    parser.add_argument("--semester", type=int, choices=[1, 2], required=True)
    parser.add_argument("--year", type=int, choices=[1, 2, 3], required=True)
    parser.add_argument("--recalculate", action="store_true", help="recompute final GPA afterwards")
    args = parser.parse_args(argv)

    if not args.image.exists():
        print(f"Error: {args.image} not found.")
        return 1

    store = MongoResultStore(get_results_collection())
    print(f"Processing {args.image}...")
    try:
        out = asyncio.run(submit_sheet(args.image.read_bytes(), args.semester, args.year, store))
    except ResultSheetError as e:
        print(f"Failed: {e}")
        return 1
    print(f"Stored {out['records_created']} result rows")

    if args.recalculate:
        out = recalculate_all(store)
        print(f"Final GPA updated for {out['students_updated']} students")
    return 0


if __name__ == "__main__":
    sys.exit(main())
