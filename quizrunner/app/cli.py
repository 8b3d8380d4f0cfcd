from __future__ import annotations

"""CLI for quizrunner using SessionManager and the question bank."""

import argparse
import sys
from typing import Callable, List, Tuple

from .. import __version__
from ..bank.bank import BankError, QuestionBank, load_bank
from ..config.config import load_config, require_bank, validate_config
from ..stats.stats import format_history, format_review, format_summary
from ..storage.store import StorageError
from ..util.randomness import seed_if_needed
from . import explain
from .session_manager import SessionManager


def _parse_weeks(value: str) -> List[Tuple[int, int]]:
    """Parse "2024:1,2024:3" into [(2024, 1), (2024, 3)]."""
    pairs = []
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            year, week = token.split(":", 1)
            pairs.append((int(year), int(week)))
        except ValueError:
            raise argparse.ArgumentTypeError(f"bad week '{token}', expected YEAR:WEEK") from None
    return pairs


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="quizrunner")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--version", action="version", version=f"quizrunner {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list-subjects")

    lw = sub.add_parser("list-weeks")
    lw.add_argument("--subject", required=True)

    rp = sub.add_parser("run")
    rp.add_argument("--subject", required=True)
    group = rp.add_mutually_exclusive_group()
    group.add_argument("--weeks", type=_parse_weeks, default=None, help="Comma-separated YEAR:WEEK list")
    group.add_argument("--year", type=int, action="append", default=None, help="Select every week of a year")
    group.add_argument("--all-weeks", action="store_true")
    rp.add_argument("--explain", action="store_true")

    hp = sub.add_parser("history")
    hp.add_argument("--plot", default=None, help="Save accuracy chart (PNG) to this path")
    hp.add_argument("--export", default=None, help="Export history (.parquet or .ndjson)")

    sub.add_parser("clear-history")
    return p


def _run_quiz(mgr: SessionManager, ask: Callable[[str], str] = input) -> int:
    if not mgr.start_session():
        print(mgr.last_error or "Cannot start a session.")
        return 2

    while not mgr.is_complete:
        q = mgr.current_question
        idx, total = mgr.progress
        print(f"\nQuestion {idx + 1} of {total}")
        print(q.question)
        for i, opt in enumerate(q.options, start=1):
            print(f"  {i}. {opt}")
        try:
            raw = ask("Answer number, [s]kip or [q]uit and submit: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            mgr.submit_quiz()
            break
        if raw == "s":
            mgr.skip_question()
        elif raw == "q":
            mgr.submit_quiz()
        elif raw.isdigit() and 1 <= int(raw) <= len(q.options):
            mgr.submit_answer(q.options[int(raw) - 1])
        else:
            print("Please enter an option number, 's' or 'q'.")

    buckets = mgr.review()
    print()
    print(format_summary(mgr.score, mgr.attempted, buckets))
    review = format_review(buckets)
    if review:
        print(review)
    if mgr.session.persist_error is not None:
        print("Warning: this result could not be saved to the score history.")
    return 0


def main(argv: List[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    seed_if_needed()
    cfg = validate_config(load_config(args.config))

    if args.cmd in ("history", "clear-history"):
        # history commands never read the bank
        mgr = SessionManager.from_config(cfg, QuestionBank([]))
        if args.cmd == "history":
            return _history(mgr, cfg, args)
        try:
            mgr.clear_history()
        except StorageError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1
        print("Score history cleared.")
        return 0

    require_bank(cfg)
    try:
        bank = load_bank(cfg["bank"]["path"])
    except BankError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.cmd == "list-subjects":
        for s in sorted(bank.subjects()):
            print(s)
        return 0

    if args.cmd == "list-weeks":
        weeks = sorted(bank.weeks_for(args.subject))
        if not weeks:
            print(f"No weeks for subject '{args.subject}'.")
            return 2
        for year, week in weeks:
            print(f"{year}:{week}")
        return 0

    if args.cmd == "run":
        explain.enable(args.explain)
        mgr = SessionManager.from_config(cfg, bank)
        try:
            mgr.select_subject(args.subject)
            if args.weeks:
                mgr.selection.select_weeks(args.weeks)
            elif args.year:
                for y in args.year:
                    mgr.selection.select_year(y)
            else:
                mgr.select_all_weeks()
        except KeyError as exc:
            print(f"ERROR: {exc.args[0]}", file=sys.stderr)
            return 2
        return _run_quiz(mgr)

    return 1


def _history(mgr: SessionManager, cfg, args) -> int:
    from analytics import (
        AnalyticsConfig,
        compute_metrics,
        ewma_by_session,
        export_history,
        history_frame,
        plot_history,
    )

    entries = mgr.history()
    print(format_history(entries))
    if not entries:
        return 0

    acfg = AnalyticsConfig.from_config(cfg)
    df = ewma_by_session(history_frame(entries), "accuracy", acfg.smoothing_span)
    m = compute_metrics(df, acfg)
    print(
        f"\nSessions: {m['sessions']}  mean accuracy: {m['mean_accuracy']:.2f}%  "
        f"best: {m['best_accuracy']:.2f}%  on target: {m['on_target_share']:.0%}"
    )
    if args.plot:
        plot_history(df, target=acfg.target_accuracy, save_path=args.plot)
        print(f"Chart saved to: {args.plot}")
    if args.export:
        out = export_history(df, args.export)
        print(f"History exported to: {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
