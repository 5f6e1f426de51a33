#!/usr/bin/env python3
"""Import employees from a JSON file into the record store, or export them.

Run from the backend/ directory with STORAGE_PATH set:

    python3 scripts/employees_io.py import employees.json [--dry-run] [--verbose]
    python3 scripts/employees_io.py export [out.json]

The import file is a JSON array of records using the camelCase field names.
Any "id" in the file is ignored; the store assigns fresh identifiers.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from pydantic import TypeAdapter, ValidationError  # noqa: E402

from hrms.core.config import Settings  # noqa: E402
from hrms.models.employee import Employee, EmployeeCreate  # noqa: E402
from hrms.services.employee_store import DuplicateEmailError, EmployeeStore  # noqa: E402

logger = logging.getLogger(__name__)

_EXPORT = TypeAdapter(list[Employee])


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import or export HRMS employee records")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Add records from a JSON array file")
    imp.add_argument("file", type=Path)
    imp.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate records without writing them",
    )

    exp = sub.add_parser("export", help="Write all stored records as a JSON array")
    exp.add_argument("file", type=Path, nargs="?", default=None, help="Output file (default: stdout)")

    return parser.parse_args(argv)


def import_records(store: EmployeeStore, raw_records: list[dict[str, Any]], dry_run: bool = False) -> tuple[int, int]:
    """Return ``(imported, skipped)`` counts."""
    imported = 0
    skipped = 0
    seen_emails: set[str] = set()

    for index, raw in enumerate(raw_records):
        try:
            data = EmployeeCreate.model_validate(raw)
        except ValidationError as e:
            logger.warning("Record %d is invalid, skipping: %s", index, e)
            skipped += 1
            continue

        email = data.email.lower()
        if email in seen_emails or not store.is_email_unique(data.email):
            logger.warning("Record %d email %s already registered, skipping", index, data.email)
            skipped += 1
            continue
        seen_emails.add(email)

        if dry_run:
            imported += 1
            continue

        try:
            employee = store.create_employee(data)
        except DuplicateEmailError:
            logger.warning("Record %d email %s already registered, skipping", index, data.email)
            skipped += 1
            continue
        logger.debug("Imported record %d as %s", index, employee.id)
        imported += 1

    return imported, skipped


def export_records(store: EmployeeStore) -> str:
    return _EXPORT.dump_json(store.list_all(), by_alias=True, indent=2).decode("utf-8")


def run(args: argparse.Namespace, settings: Settings | None = None) -> int:
    settings = settings or Settings()
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    store = EmployeeStore()
    store.initialize(settings)
    if not store.initialized:
        logger.error("STORAGE_PATH is not set. Exiting.")
        return 1

    if args.command == "export":
        payload = export_records(store)
        if args.file is None:
            print(payload)
        else:
            args.file.write_text(payload, encoding="utf-8")
            logger.info("Exported employees to %s", args.file)
        return 0

    try:
        raw_records = json.loads(args.file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.exception("Could not read %s", args.file)
        return 1
    if not isinstance(raw_records, list):
        logger.error("%s does not contain a JSON array", args.file)
        return 1

    imported, skipped = import_records(store, raw_records, dry_run=args.dry_run)

    logger.info("=" * 50)
    logger.info("Import complete!")
    logger.info("Imported: %d", imported)
    logger.info("Skipped: %d", skipped)
    if args.dry_run:
        logger.info("[DRY RUN] No records were actually written.")
    return 0


def main() -> None:
    sys.exit(run(parse_args()))


if __name__ == "__main__":
    main()
