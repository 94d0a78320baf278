"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path

from dealer_pulse.store.base import TABLE_KEYS


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="dealer-pulse", description="Dealership DMS report importer and dashboard metrics")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings YAML (storage, ingest, analytics sections)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # import
    import_parser = subparsers.add_parser("import", help="Import a DMS CSV export")
    import_parser.add_argument("file", type=Path, help="CSV file (leads, opportunities, sales or inventory)")
    import_parser.add_argument(
        "--db",
        type=Path,
        default=None,
        metavar="DB_PATH",
        help="SQLite store path (overrides config)",
    )
    import_parser.add_argument(
        "--day-first",
        action="store_true",
        help="Read ambiguous dates like 03/04/2024 as 3 April",
    )
    import_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and map only; do not write to the store",
    )
    import_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write canonical records as JSON to file",
    )

    # detect
    detect_parser = subparsers.add_parser("detect", help="Show which report type a CSV is")
    detect_parser.add_argument("file", type=Path)

    # store
    store_parser = subparsers.add_parser("store", help="Query the local record store")
    store_parser.add_argument("action", choices=["list", "count"], help="List records or show count")
    store_parser.add_argument("--table", required=True, choices=sorted(TABLE_KEYS), help="Table to query")
    store_parser.add_argument("--month", type=str, default=None, help="Only this month (YYYY-MM)")
    store_parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database")

    # summary
    summary_parser = subparsers.add_parser("summary", help="Monthly funnel metrics vs previous month or year")
    summary_parser.add_argument("--month", type=str, required=True, help="Month to report (YYYY-MM)")
    summary_parser.add_argument(
        "--compare",
        choices=["mom", "yoy"],
        default="mom",
        help="Baseline: previous month (mom) or same month last year (yoy)",
    )
    summary_parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database")

    # runs
    runs_parser = subparsers.add_parser("runs", help="List recent imports")
    runs_parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database")
    runs_parser.add_argument("--limit", type=int, default=20)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "import":
        _run_import(args)
    elif args.command == "detect":
        _run_detect(args)
    elif args.command == "store":
        _run_store(args)
    elif args.command == "summary":
        _run_summary(args)
    elif args.command == "runs":
        _run_runs(args)
    else:
        parser.print_help()


def _load_settings(args: argparse.Namespace):
    """Settings from --config and environment, with per-command flags applied."""
    from dealer_pulse.config import Settings

    settings = Settings.load(getattr(args, "config", None))
    updates: dict = {}
    if getattr(args, "db", None) is not None:
        updates["backend"] = "sqlite"
        updates["db_path"] = args.db
    if getattr(args, "day_first", False):
        updates["day_first"] = True
    return settings.model_copy(update=updates) if updates else settings


def _read_text(path: Path) -> str:
    """Read an uploaded export, tolerating a UTF-8 BOM and stray bytes."""
    try:
        return path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        raise SystemExit(f"Cannot read {path}: {e}")


def _run_import(args: argparse.Namespace) -> None:
    """Run import command."""
    from dealer_pulse.config import open_store
    from dealer_pulse.errors import IngestError
    from dealer_pulse.pipeline import import_report, parse_report
    from dealer_pulse.store import SQLiteRecordStore

    settings = _load_settings(args)
    text = _read_text(args.file)

    if args.dry_run:
        try:
            parsed = parse_report(text, settings)
        except IngestError as e:
            print(f"Error: {e}", file=sys.stderr)
            raise SystemExit(1)
        records = parsed.records
        print(
            f"Detected {parsed.report_type.value}: {len(records)} records "
            f"({parsed.rows_dropped} dropped) - dry run, nothing saved"
        )
    else:
        store = open_store(settings)
        run = store.start_run(args.file.name) if isinstance(store, SQLiteRecordStore) else None
        try:
            result = import_report(text, store, settings)
        except IngestError as e:
            if run:
                store.finish_run(
                    run.id,
                    report_type=getattr(e, "report_type", None),
                    status="failed",
                    message=str(e),
                )
            print(f"Error: {e}", file=sys.stderr)
            raise SystemExit(1)
        if run:
            store.finish_run(
                run.id,
                report_type=result.report_type.value,
                rows_read=result.rows_read,
                records_upserted=result.upserted,
            )
        records = result.records
        print(
            f"Imported {result.report_type.value}: {result.rows_read} rows read, "
            f"{result.upserted} saved to {result.table}"
        )

    if args.output:
        output = json.dumps([r.to_row() for r in records], indent=2, default=str)
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote {len(records)} records to {args.output}")


def _run_detect(args: argparse.Namespace) -> None:
    """Run detect command."""
    from dealer_pulse.errors import IngestError
    from dealer_pulse.pipeline import detect_report

    settings = _load_settings(args)
    try:
        report_type, header_index, columns, _ = detect_report(_read_text(args.file), settings)
    except IngestError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)
    print(json.dumps({"report_type": report_type.value, "header_row": header_index, "columns": columns}, indent=2))


def _local_store(args: argparse.Namespace):
    from dealer_pulse.config import open_store

    return open_store(_load_settings(args))


def _run_store(args: argparse.Namespace) -> None:
    """Run store command."""
    from dealer_pulse.store import SQLiteRecordStore

    store = _local_store(args)
    if args.action == "list":
        rows = store.fetch(args.table, month=args.month)
        print(json.dumps(rows, indent=2, default=str))
    elif args.action == "count":
        if isinstance(store, SQLiteRecordStore):
            print(store.count(args.table, month=args.month))
        else:
            print(len(store.fetch(args.table, month=args.month)))


def _run_summary(args: argparse.Namespace) -> None:
    """Run summary command."""
    from dealer_pulse.analytics import build_summary

    from dealer_pulse.config import open_store

    settings = _load_settings(args)
    store = open_store(settings)
    try:
        summary = build_summary(
            store,
            args.month,
            compare=args.compare,
            aged_days=settings.aged_inventory_days,
        )
    except ValueError as e:
        raise SystemExit(str(e))
    _print_summary(summary)


def _print_summary(summary) -> None:
    """Print the comparison table."""
    print(f"\n--- {summary.month} vs {summary.baseline} ({summary.compare.upper()}) ---")
    print(f"  {'Metric':<14}{summary.baseline:>10}{summary.month:>10}{'Change':>10}")
    for m in summary.metrics:
        change = f"{m.change_pct:+.1f}%" if m.change_pct is not None else "-"
        print(f"  {m.label:<14}{m.previous:>10}{m.current:>10}{change:>10}")
    inv = summary.inventory
    print(f"\n  Inventory: {inv.total} units, {inv.aged} aged > {inv.aged_threshold_days} days")
    if summary.lead_sources:
        print("  Lead sources:")
        for source, count in summary.lead_sources:
            print(f"    {source}: {count}")
    print()


def _run_runs(args: argparse.Namespace) -> None:
    """Run runs command."""
    from dealer_pulse.store import SQLiteRecordStore

    store = _local_store(args)
    if not isinstance(store, SQLiteRecordStore):
        raise SystemExit("Import history is only kept by the SQLite store")
    for run in store.list_runs(limit=args.limit):
        print(
            f"  #{run.id} {run.started_at:%Y-%m-%d %H:%M} {run.file_name} "
            f"[{run.status}] {run.report_type or '-'} read={run.rows_read} saved={run.records_upserted}"
        )


if __name__ == "__main__":
    main()
