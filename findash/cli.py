#!/usr/bin/env python3
"""
Findash CLI — summaries, transaction listings, exports and the API server.

USAGE:
  python -m findash.cli summary statement.xlsx                     # Totals, categories, months
  python -m findash.cli summary statement.xlsx --type expense --from 2026-01-01

  python -m findash.cli transactions statement.xlsx --search coffee --sort amount
  python -m findash.cli transactions statement.xlsx --limit 50

  python -m findash.cli export statement.xlsx --output report.xlsx            # Summary report
  python -m findash.cli export statement.xlsx --format csv --output out.csv   # Transactions

  python -m findash.cli template --output finance_template.xlsx
  python -m findash.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import datetime as dt
import os
import sys
from pathlib import Path

from findash.analytics.common import format_currency, format_number, format_percentage, month_label
from findash.analytics.summary import (
    SORT_KEYS, by_month, category_breakdown, date_range, sort_transactions, summary_totals,
)
from findash.config import EXPORTS_FOLDER, configure_logging
from findash.data.errors import IngestionError
from findash.data.schemas import ALL, FilterCriteria, TransactionType
from findash.data.store import DataStore
from findash.reports import summary_report, transactions_export


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  FINDASH — {title}")
    print("=" * 70)


def _iso_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}' (expected YYYY-MM-DD)")


def _build_filters(args) -> FilterCriteria:
    """Build FilterCriteria from CLI args."""
    tx_type = getattr(args, "type", None) or ALL
    return FilterCriteria(
        search_text=getattr(args, "search", None) or "",
        category=getattr(args, "category", None) or ALL,
        type=ALL if tx_type == ALL else TransactionType.parse(tx_type).value,
        date_from=getattr(args, "date_from", None),
        date_to=getattr(args, "date_to", None),
    )


def _load(args) -> DataStore:
    store = DataStore().load_path(Path(args.file))
    r = store.last_result
    print(f"  Loaded {r.accepted_row_count:,} of {r.source_row_count:,} rows from {r.file_name}"
          f" (sheet '{r.sheet_name}')")
    print(f"  Columns detected: {', '.join(r.detected_columns)}")
    return store


def cmd_summary(args) -> int:
    """Print totals, expense categories, and monthly breakdown."""
    _banner("SUMMARY")
    store = _load(args)
    records = store.get_transactions(_build_filters(args))

    t = summary_totals(records)
    rng = date_range(records)
    print(f"\n  Period:          {rng.min or 'N/A'} to {rng.max or 'N/A'}")
    print(f"  Transactions:    {format_number(t.transaction_count)}")
    print(f"  Total income:    {format_currency(t.total_income):>14}")
    print(f"  Total expenses:  {format_currency(t.total_expenses):>14}")
    print(f"  Net balance:     {format_currency(t.balance):>14}")
    print(f"  Savings rate:    {format_percentage(t.savings_rate):>14}")

    cats = category_breakdown(records, "expense")
    if cats:
        print(f"\nEXPENSES BY CATEGORY ({len(cats)}):\n")
        for i, c in enumerate(cats, 1):
            print(f"{i:<4}{c.category[:36]:<38}{format_currency(c.amount):>14}  {c.percentage:5.1f}%")

    months = by_month(records)
    if months:
        print("\nBY MONTH:\n")
        print(f"    {'Month':<10}{'Income':>14}{'Expenses':>14}{'Net':>14}")
        for m in months:
            print(f"    {month_label(m.month_key):<10}{format_currency(m.income):>14}"
                  f"{format_currency(m.expenses):>14}{format_currency(m.net):>14}")
    print()
    return 0


def cmd_transactions(args) -> int:
    """List filtered transactions as a table."""
    _banner("TRANSACTIONS")
    store = _load(args)
    records = sort_transactions(store.get_transactions(_build_filters(args)), args.sort, args.direction)

    print(f"\n  {format_number(len(records))} matching transactions\n")
    for r in records[:args.limit]:
        sign = "+" if r.type == TransactionType.INCOME else "-"
        print(f"  {r.date}  {r.description[:34]:<36}{r.category[:20]:<22}{sign}{format_currency(r.amount):>13}")
    if len(records) > args.limit:
        print(f"  ... {len(records) - args.limit:,} more (use --limit)")
    print()
    return 0


def cmd_export(args) -> int:
    """Write the summary report or the transaction list."""
    _banner("EXPORT")
    store = _load(args)
    records = store.get_transactions(_build_filters(args))
    if not records:
        print("  No data to export")
        return 1

    ext = {"report": "xlsx", "xlsx": "xlsx", "csv": "csv"}[args.format]
    stamp = dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    output = Path(args.output) if args.output else EXPORTS_FOLDER / f"finance_{args.format}_{stamp}.{ext}"

    if args.format == "report":
        summary_report.generate_excel(records, output)
    elif args.format == "xlsx":
        transactions_export.generate_excel(records, output)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(transactions_export.generate_csv(records), encoding="utf-8")

    print(f"\n  Exported {len(records):,} transactions to: {output}\n")
    return 0


def cmd_template(args) -> int:
    """Write the sample spreadsheet template."""
    out = transactions_export.generate_template(args.output)
    print(f"\n  Template saved to: {out}\n")
    return 0


def cmd_serve(args) -> int:
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Findash API on port {args.port}...")
    uvicorn.run("findash.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", help="Spreadsheet (.xlsx, .xls, .xlsm, .csv)")
    p.add_argument("--search", help="Text in description or category")
    p.add_argument("--category", help="Exact category name")
    p.add_argument("--type", choices=["income", "expense", "all"], help="Transaction type")
    p.add_argument("--from", dest="date_from", type=_iso_date, help="Start date YYYY-MM-DD (inclusive)")
    p.add_argument("--to", dest="date_to", type=_iso_date, help="End date YYYY-MM-DD (inclusive)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Findash — personal finance spreadsheet dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    summary_parser = subparsers.add_parser("summary", help="Print summary totals")
    _add_filter_args(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    tx_parser = subparsers.add_parser("transactions", help="List transactions")
    _add_filter_args(tx_parser)
    tx_parser.add_argument("--sort", choices=sorted(SORT_KEYS), default="date", help="Sort column")
    tx_parser.add_argument("--direction", choices=["asc", "desc"], default="desc")
    tx_parser.add_argument("--limit", type=int, default=25, help="Max rows to print (default 25)")
    tx_parser.set_defaults(func=cmd_transactions)

    export_parser = subparsers.add_parser("export", help="Export report or transactions")
    _add_filter_args(export_parser)
    export_parser.add_argument("--format", choices=["report", "xlsx", "csv"], default="report")
    export_parser.add_argument("--output", help=f"Output path (default: {EXPORTS_FOLDER})")
    export_parser.set_defaults(func=cmd_export)

    template_parser = subparsers.add_parser("template", help="Write the sample template")
    template_parser.add_argument("--output", default="finance_template.xlsx", help="Output path")
    template_parser.set_defaults(func=cmd_template)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(os.environ.get("FINDASH_LOG_LEVEL", "WARNING"))
    try:
        return args.func(args)
    except IngestionError as exc:
        print(f"  Error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
