"""Command-line access to Fulcrum forms and records.

This module serves as a CLI wrapper around fulcrum.core.api services.
"""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fulcrum.config import load_settings
from fulcrum.core.api import (
    FulcrumClient,
    FormService,
    RecordService,
    UserService,
)
from fulcrum.core.exceptions import FulcrumError


def _parse_assignments(pairs: list[str] | None) -> dict[str, str]:
    """Turn ``["name=value", ...]`` into a dict."""
    fields: dict[str, str] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {pair!r}")
        fields[name.strip()] = value
    return fields


def _format_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(_format_value(item) for item in value)
    if hasattr(value, "id") and hasattr(value, "raw"):
        return str(value.id)
    return str(value)


def _print_fields(fields) -> None:
    for field in fields:
        print(f"{field.data_name}\t{field.type}\t{_format_value(field.get_value())}")


def _print_sections(sections, depth: int = 0) -> None:
    for section in sections:
        print(f"{'  ' * depth}{section.data_name}\t{section.label or ''}")
        _print_sections(section.get_sections(), depth + 1)


def main() -> None:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Fulcrum API helper")
    parser.add_argument("--api-key", default=None, help="API token (default: FULCRUM_API_KEY)")
    parser.add_argument("--api-url", default=None, help="API base URL (default: FULCRUM_API_URL)")
    parser.add_argument("--verbose", "-v", action="store_true")

    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("users")

    sf = sub.add_parser("forms")
    sf.add_argument("--simple", action="store_true", help="Skip form schemas")

    ss = sub.add_parser("sections")
    ss.add_argument("--form-id", required=True)

    srs = sub.add_parser("records")
    srs.add_argument("--form-id", required=True)
    srs.add_argument("--order-by", default=None)
    srs.add_argument("--desc", action="store_true")
    srs.add_argument("--datetime", action="store_true", help="Order on timestamps")

    sr = sub.add_parser("record")
    sr.add_argument("--record-id", required=True)
    sr.add_argument("--field", action="append", help="Data name to show (repeatable)")

    sc = sub.add_parser("create-record")
    sc.add_argument("--form-id", required=True)
    sc.add_argument("--set", action="append", metavar="NAME=VALUE", dest="assignments")
    sc.add_argument("--lat", type=float, default=None)
    sc.add_argument("--lng", type=float, default=None)
    sc.add_argument("--assign", default=None, help="assigned_to_id")

    su = sub.add_parser("update-record")
    su.add_argument("--record-id", required=True)
    su.add_argument("--set", action="append", metavar="NAME=VALUE", dest="assignments")

    sd = sub.add_parser("delete-record")
    sd.add_argument("--record-id", required=True)

    args = parser.parse_args()

    if not args.cmd:
        parser.print_help()
        return

    settings = load_settings(required=False)
    logging.basicConfig(level="DEBUG" if args.verbose else settings.log_level)

    api_key = args.api_key or settings.api_key
    if not api_key:
        parser.error("Missing API key (use --api-key or FULCRUM_API_KEY)")

    client = FulcrumClient(
        api_key,
        base_url=args.api_url or settings.api_url,
        photo_url=settings.photo_url,
        timeout=settings.request_timeout,
    )

    try:
        fields = _parse_assignments(getattr(args, "assignments", None))
    except ValueError as e:
        parser.error(str(e))

    if args.cmd == "create-record" and (args.lat is None) != (args.lng is None):
        parser.error("--lat and --lng must be given together")

    try:
        if args.cmd == "users":
            for user in UserService(client).get_users():
                print(f"{user.id}\t{user.full_name}\t{user.email or ''}")
        elif args.cmd == "forms":
            for form in FormService(client).get_forms(simple=args.simple):
                print(f"{form.id}\t{form.name}\t{form.record_count or 0}")
        elif args.cmd == "sections":
            form = FormService(client).get_form(args.form_id)
            if form is None:
                print(f"[sections] Form '{args.form_id}' not found", file=sys.stderr)
                sys.exit(1)
            _print_sections(form.get_sections())
        elif args.cmd == "records":
            records = RecordService(client).get_records(args.form_id)
            if args.order_by:
                records.order_by(
                    args.order_by,
                    "desc" if args.desc else "asc",
                    kind="datetime" if args.datetime else None,
                )
            for record in records:
                print(f"{record.id}\t{record.status or ''}\t{record.updated_at or ''}")
            print(f"[records] {len(records)} of {records.count()} record(s)", file=sys.stderr)
        elif args.cmd == "record":
            record = RecordService(client).get_record(args.record_id)
            if record is None:
                print(f"[record] Record '{args.record_id}' not found", file=sys.stderr)
                sys.exit(1)
            if args.field:
                selected = []
                for name in args.field:
                    field = record.get_field(name, return_empty=True)
                    if field is None:
                        print(f"[record] Unknown field '{name}'", file=sys.stderr)
                    else:
                        selected.append(field)
                _print_fields(selected)
            else:
                _print_fields(record.get_fields())
        elif args.cmd == "create-record":
            form = FormService(client).get_form(args.form_id)
            if form is None:
                print(f"[create-record] Form '{args.form_id}' not found", file=sys.stderr)
                sys.exit(1)
            if args.lat is not None and args.lng is not None:
                fields["location"] = {"lat": args.lat, "lng": args.lng}
            if args.assign:
                fields["assigned_to_id"] = args.assign
            record = form.create_record(
                fields,
                longitude=settings.default_longitude,
                latitude=settings.default_latitude,
            )
            if record is None:
                print("[create-record] API returned no record", file=sys.stderr)
                sys.exit(1)
            print(record.id)
        elif args.cmd == "update-record":
            record = RecordService(client).get_record(args.record_id)
            if record is None:
                print(f"[update-record] Record '{args.record_id}' not found", file=sys.stderr)
                sys.exit(1)
            updated = record.update(fields)
            print(f"[update-record] Record '{args.record_id}' {'updated' if updated else 'not updated'}", file=sys.stderr)
        elif args.cmd == "delete-record":
            deleted = RecordService(client).delete_record(args.record_id)
            print(f"[delete-record] Record '{args.record_id}' {'deleted' if deleted else 'not found'}", file=sys.stderr)
            if not deleted:
                sys.exit(1)
        else:
            parser.print_help()
    except FulcrumError as e:
        print(f"[{args.cmd}] Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
