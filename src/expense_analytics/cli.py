import argparse
import dataclasses
import datetime as dt
import json
import logging
from typing import Any

from dotenv import load_dotenv

from . import __version__
from .config import load_settings
from .errors import ExpenseAnalyticsError
from .logging_setup import setup_logging


def _plain(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj):
        return dataclasses.asdict(obj)
    if isinstance(obj, list):
        return [_plain(x) for x in obj]
    return obj


def _dump(result: Any) -> str:
    return json.dumps(_plain(result), ensure_ascii=False, indent=2, default=str)


def _require(args: argparse.Namespace, *names: str) -> None:
    missing = [n for n in names if getattr(args, n) is None]
    if missing:
        raise SystemExit(f"{args.command}: missing --{', --'.join(m.replace('_', '-') for m in missing)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expense-analytics")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    parser.add_argument(
        "command",
        nargs="?",
        default="health",
        choices=["health", "months", "month", "category", "compare", "trend", "insights", "ask"],
        help="Command to run",
    )
    parser.add_argument(
        "--records",
        type=str,
        default=None,
        help="Path to a .json or .jsonl snapshot of transaction records",
    )
    parser.add_argument("--month", type=int, default=None, help="Month number 1-12")
    parser.add_argument("--year", type=int, default=None, help="Four digit year")
    parser.add_argument("--month2", type=int, default=None, help="Second month (compare)")
    parser.add_argument("--year2", type=int, default=None, help="Second year (compare)")
    parser.add_argument(
        "--category",
        type=str,
        default=None,
        help="Category label (case-insensitive). With 'category' and no --month: all months.",
    )
    parser.add_argument("--window", type=int, default=None, help="Trend window in months")
    parser.add_argument("--text", type=str, default=None, help="Free-text question (ask)")
    parser.add_argument(
        "--as-of",
        type=dt.date.fromisoformat,
        default=None,
        help="Reference day YYYY-MM-DD for insights (default: today)",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the structured result instead of the narrative"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    load_dotenv()
    settings = load_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)

    if args.command == "health":
        logger.info("Engine ready.")
        print("ok")
        return 0

    from .analytics import (
        aggregate_category_all_months,
        aggregate_category_in_month,
        aggregate_month,
        analyze_spending,
        available_months,
        compare_months,
        rolling_trend,
    )
    from .render import narrative
    from .storage import load_snapshot

    if not args.records:
        parser.error("--records is required for this command")

    try:
        records = load_snapshot(args.records)
    except ExpenseAnalyticsError as e:
        logger.error("Cannot load snapshot: %s", e)
        return 2

    logger.info("Loaded %d records from %s", len(records), args.records)

    currency = settings.currency_symbol
    month_opts = {
        "top_n": settings.top_expenses_limit,
        "min_year": settings.min_year,
        "max_year": settings.max_year,
    }

    if args.command == "months":
        months = available_months(records)
        if args.json:
            print(_dump(months))
            return 0
        for m in months:
            print(f"{m.month_name} {m.year}: {m.total_amount:,.2f} ({m.transaction_count} transactions)")
        if not months:
            print("no records")
        return 0

    if args.command == "month":
        _require(args, "month", "year")
        res = aggregate_month(records, args.month, args.year, **month_opts)
        print(
            _dump(res)
            if args.json
            else narrative.format_month(
                res, currency=currency, daily_limit=settings.daily_breakdown_limit
            )
        )
        return 0 if res.found else 1

    if args.command == "category":
        _require(args, "category")
        if args.month is None and args.year is None:
            hist = aggregate_category_all_months(records, args.category)
            print(
                _dump(hist)
                if args.json
                else narrative.format_category_history(
                    hist, currency=currency, month_limit=settings.monthly_breakdown_limit
                )
            )
            return 0 if hist.found else 1

        _require(args, "month", "year")
        base = aggregate_month(records, args.month, args.year, **month_opts)
        cres = aggregate_category_in_month(records, args.month, args.year, args.category, **month_opts)
        print(
            _dump(cres)
            if args.json
            else narrative.format_category_month(
                base, cres, currency=currency, daily_limit=settings.daily_breakdown_limit
            )
        )
        return 0 if cres.found else 1

    if args.command == "compare":
        _require(args, "month", "year", "month2")
        year2 = args.year2 if args.year2 is not None else args.year
        cmp = compare_months(records, args.month, args.year, args.month2, year2, **month_opts)
        print(
            _dump(cmp)
            if args.json
            else narrative.format_comparison(
                cmp, currency=currency, category_limit=settings.comparison_category_limit
            )
        )
        return 0 if cmp.found else 1

    if args.command == "trend":
        window = args.window if args.window is not None else settings.trend_window
        if window < 1:
            parser.error("--window must be >= 1")
        trend = rolling_trend(records, window)
        print(_dump(trend) if args.json else narrative.format_trend(trend, currency=currency))
        return 0

    if args.command == "insights":
        ins = analyze_spending(records, args.as_of or dt.date.today())
        print(_dump(ins) if args.json else narrative.format_insights(ins, currency=currency))
        return 0

    if args.command == "ask":
        from .nlq.pipeline import handle_nlq
        from .nlq.types import NLQRequest

        _require(args, "text")
        resp = handle_nlq(NLQRequest(text=args.text, records=records, as_of=args.as_of), settings)
        if resp.clarification is not None:
            print(narrative.format_parse_failure(resp.clarification.prompt))
            return 1
        if resp.result is None:
            print("Unsupported question. Try e.g. 'How much did I spend in March 2025?'")
            return 1
        if args.json:
            print(_dump(resp.result.meta.get("result") if resp.result.meta else None))
        else:
            print(resp.result.text)
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
