#!/usr/bin/env python3
"""
Ingest a saved provider payload into one case.

Safe by default (dry-run: prints the mapped case). Use --apply to persist.

    python scripts/ingest_payload.py CASE_ID payload.json --search-type high_court --apply
"""

import argparse
import json
import sys


def main() -> int:
    parser = argparse.ArgumentParser(description="Map a provider payload and apply it to a case.")
    parser.add_argument("case_id", help="Case id in the store")
    parser.add_argument("payload", help="Path to the provider JSON payload")
    parser.add_argument(
        "--search-type",
        default=None,
        help="high_court, district_court, supreme_court or district_cause_list (default: detect)",
    )
    parser.add_argument("--apply", action="store_true", help="Persist changes (default: dry-run)")
    args = parser.parse_args()

    from court_sync.ingest import MapperError, map_payload
    from court_sync.schemas import SearchType

    with open(args.payload, encoding="utf-8") as f:
        payload = json.load(f)

    try:
        search_type = SearchType(args.search_type) if args.search_type else None
    except ValueError:
        print(f"Unknown search type: {args.search_type}", file=sys.stderr)
        return 2

    if not args.apply:
        try:
            mapped = map_payload(payload, search_type)
        except MapperError as e:
            print(f"Mapping failed: {e}", file=sys.stderr)
            return 1
        print(mapped.model_dump_json(indent=2))
        print("Dry-run only. Re-run with --apply to persist.")
        return 0

    from court_sync.db.session import get_db_session, init_db
    from court_sync.db.store import SQLAlchemyCaseStore
    from court_sync.upsert import CaseNotFoundError, ingest_case

    init_db()
    try:
        with get_db_session() as db:
            result = ingest_case(SQLAlchemyCaseStore(db), args.case_id, payload, search_type)
    except (MapperError, CaseNotFoundError) as e:
        print(f"Ingestion failed: {e}", file=sys.stderr)
        return 1

    print(result.model_dump_json(indent=2))
    return 0 if not result.errors else 1


if __name__ == "__main__":
    raise SystemExit(main())
