"""Command-line interface for the household chore scheduler."""

from __future__ import annotations

import argparse
from datetime import date, datetime

from choreplan.io.config import load_config
from choreplan.domain.db import get_session, init_database, reset_database
from choreplan.io.export_csv import export_chores_csv, export_occurrences_csv
from choreplan.io.import_csv import import_chores_csv, import_completions_csv, import_members_csv
from choreplan.services.mutations import archive_chore, clear_override, record_completion, set_override
from choreplan.services.schedule import build_household_schedule
from choreplan.services.views import current_week_view, summarize_occurrences, zone_matrix_view


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def _parse_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid timestamp '{value}', expected ISO 8601")


def _db_url(args: argparse.Namespace, cfg) -> str:
    return args.db or cfg.db_url


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    cfg = load_config(args.config)
    db_url = _db_url(args, cfg)
    init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_reset_db(args: argparse.Namespace) -> None:
    """Drop and recreate all tables."""
    if not args.yes:
        print("[WARN] Refusing to reset without --yes")
        return
    cfg = load_config(args.config)
    reset_database(_db_url(args, cfg))


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        if args.members:
            count = import_members_csv(session, args.members, args.household)
            print(f"[OK] Imported {count} members")

        if args.chores:
            count = import_chores_csv(session, args.chores, args.household)
            print(f"[OK] Imported {count} chores")

        if args.completions:
            count = import_completions_csv(session, args.completions)
            print(f"[OK] Imported {count} completions")

        print("[OK] CSV import complete")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Import failed: {e}")
        raise
    finally:
        session.close()


def _cmd_week(args: argparse.Namespace) -> None:
    """Print the current week board."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        view = current_week_view(session, args.household, args.member, today=args.today, cfg=cfg)
        print(f"Week {view.week_start} to {view.week_end}")
        print(f"\nPending ({len(view.pending)}):")
        for item in view.pending:
            occ = item.occurrence
            print(f"  [{occ.status:7}] {occ.date}  {item.zone_name} / {item.chore_title}  -> {occ.assignee_id or '-'}")
        print(f"\nDone ({len(view.done)}):")
        for item in view.done:
            occ = item.occurrence
            print(f"  [done   ] {occ.date}  {item.zone_name} / {item.chore_title}  -> {occ.assignee_id or '-'}")
        if not view.pending:
            print("\n[OK] All chores done this week.")
        for chore_id, error in view.errors.items():
            print(f"[WARN] {chore_id}: {error}")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Week view failed: {e}")
        raise
    finally:
        session.close()


def _cmd_audit(args: argparse.Namespace) -> None:
    """Print (and optionally export) every occurrence in a window."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        result = build_household_schedule(
            session, args.household, args.member, args.start, args.end, today=args.today, cfg=cfg
        )
        for occ in result.occurrences:
            chore = result.chores[occ.chore_id]
            moved = f" (from {occ.original_date})" if occ.date != occ.original_date else ""
            print(f"{occ.date}{moved}  {chore.title:30}  {occ.assignee_id or '-':36}  {occ.status}")
        print()
        print(summarize_occurrences(result.occurrences))
        if args.out:
            export_occurrences_csv(args.out, result.occurrences, result.chores)
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Audit failed: {e}")
        raise
    finally:
        session.close()


def _cmd_matrix(args: argparse.Namespace) -> None:
    """Print a zone's chores by week for one year."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        matrix = zone_matrix_view(session, args.household, args.member, args.zone, args.year, today=args.today, cfg=cfg)
        print(f"{matrix.zone_name} {matrix.year}")
        print("Week        " + "".join(f"{c.title[:20]:22}" for c in matrix.chores))
        for number, (start, _) in enumerate(matrix.weeks, 1):
            cells = []
            for chore in matrix.chores:
                cell = matrix.cells[chore.id].get(number)
                cells.append(f"{cell.status[:4]} {cell.assignee_id or '-'}"[:20] if cell else "")
            print(f"W{number:02} {start}  " + "".join(f"{c:22}" for c in cells))
        for chore_id, error in matrix.errors.items():
            print(f"[WARN] {chore_id}: {error}")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Matrix failed: {e}")
        raise
    finally:
        session.close()


def _cmd_complete(args: argparse.Namespace) -> None:
    """Record a completion."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        completion = record_completion(
            session,
            args.household,
            args.member,
            args.chore,
            completed_at=args.at,
            notes=args.notes,
            scheduled_for=args.date,
        )
        print(f"[OK] Recorded completion {completion.id} at {completion.completed_at}")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Completion failed: {e}")
        raise
    finally:
        session.close()


def _cmd_override(args: argparse.Namespace) -> None:
    """Skip, reassign or reschedule one occurrence."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        override = set_override(
            session,
            args.household,
            args.member,
            args.chore,
            args.date,
            skipped=args.command == "skip",
            new_assignee_id=getattr(args, "to", None),
            new_date=getattr(args, "to_date", None),
        )
        print(f"[OK] Override saved: {override}")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Override failed: {e}")
        raise
    finally:
        session.close()


def _cmd_clear_override(args: argparse.Namespace) -> None:
    """Reset one occurrence to its nominal schedule."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        if clear_override(session, args.household, args.member, args.chore, args.date):
            print(f"[OK] Override cleared for {args.chore} on {args.date}")
        else:
            print(f"[WARN] No override for {args.chore} on {args.date}")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Clear override failed: {e}")
        raise
    finally:
        session.close()


def _cmd_archive(args: argparse.Namespace) -> None:
    """Archive a chore."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        chore = archive_chore(session, args.household, args.member, args.chore)
        print(f"[OK] Archived {chore.title}")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Archive failed: {e}")
        raise
    finally:
        session.close()


def _cmd_export(args: argparse.Namespace) -> None:
    """Export chores to CSV."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        count = export_chores_csv(session, args.chores, args.household, args.member)
        print(f"[OK] Exported {count} chores to {args.chores}")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Export failed: {e}")
        raise
    finally:
        session.close()


def _add_scope(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--household", required=True, help="Household ID")
    parser.add_argument("--member", required=True, help="Acting member ID")


def _add_slot(parser: argparse.ArgumentParser) -> None:
    _add_scope(parser)
    parser.add_argument("--chore", required=True, help="Chore ID")
    parser.add_argument("--date", required=True, type=_parse_date, help="Original due date (YYYY-MM-DD)")


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="choreplan",
        description="Household chore scheduling: recurrence, rotation, overrides and completions",
    )

    # Global options
    parser.add_argument("--db", help="Database URL (default: from config, sqlite:///choreplan.db)")
    parser.add_argument("--config", help="Path to config YAML or JSON")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    # reset-db command
    reset = sub.add_parser("reset-db", help="Drop and recreate all tables (deletes all data)")
    reset.add_argument("--yes", action="store_true", help="Confirm the reset")
    reset.set_defaults(func=_cmd_reset_db)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--household", required=True, help="Household ID to import into")
    imp.add_argument("--members", help="Path to members CSV")
    imp.add_argument("--chores", help="Path to chores CSV")
    imp.add_argument("--completions", help="Path to completions CSV")
    imp.set_defaults(func=_cmd_import_csv)

    # week command
    week = sub.add_parser("week", help="Show this week's chores")
    _add_scope(week)
    week.add_argument("--today", type=_parse_date, help="Reference date (default: today)")
    week.set_defaults(func=_cmd_week)

    # audit command
    audit = sub.add_parser("audit", help="List all occurrences in a window, skipped included")
    _add_scope(audit)
    audit.add_argument("--start", required=True, type=_parse_date)
    audit.add_argument("--end", required=True, type=_parse_date)
    audit.add_argument("--today", type=_parse_date, help="Reference date (default: today)")
    audit.add_argument("--out", help="Optional: export occurrences to CSV")
    audit.set_defaults(func=_cmd_audit)

    # matrix command
    matrix = sub.add_parser("matrix", help="Show a zone's chores by week for a year")
    _add_scope(matrix)
    matrix.add_argument("--zone", required=True, help="Zone name")
    matrix.add_argument("--year", required=True, type=int)
    matrix.add_argument("--today", type=_parse_date, help="Reference date (default: today)")
    matrix.set_defaults(func=_cmd_matrix)

    # complete command
    comp = sub.add_parser("complete", help="Record a completion")
    _add_scope(comp)
    comp.add_argument("--chore", required=True, help="Chore ID")
    comp.add_argument("--date", type=_parse_date, help="Original due date being completed (optional)")
    comp.add_argument("--at", type=_parse_datetime, help="Completion timestamp (default: now)")
    comp.add_argument("--notes", help="Optional notes")
    comp.set_defaults(func=_cmd_complete)

    # override commands
    skip = sub.add_parser("skip", help="Skip one occurrence")
    _add_slot(skip)
    skip.set_defaults(func=_cmd_override)

    reassign = sub.add_parser("reassign", help="Reassign one occurrence")
    _add_slot(reassign)
    reassign.add_argument("--to", required=True, help="New assignee member ID")
    reassign.add_argument("--to-date", type=_parse_date, help="Also move to this date")
    reassign.set_defaults(func=_cmd_override)

    reschedule = sub.add_parser("reschedule", help="Move one occurrence to another date")
    _add_slot(reschedule)
    reschedule.add_argument("--to-date", required=True, type=_parse_date, help="New date (YYYY-MM-DD)")
    reschedule.add_argument("--to", help="Also reassign to this member ID")
    reschedule.set_defaults(func=_cmd_override)

    clear = sub.add_parser("clear-override", help="Reset one occurrence to its nominal schedule")
    _add_slot(clear)
    clear.set_defaults(func=_cmd_clear_override)

    # archive command
    arch = sub.add_parser("archive", help="Archive a chore")
    _add_scope(arch)
    arch.add_argument("--chore", required=True, help="Chore ID")
    arch.set_defaults(func=_cmd_archive)

    # export command
    exp = sub.add_parser("export", help="Export chores to CSV")
    _add_scope(exp)
    exp.add_argument("--chores", required=True, help="Path to export chores CSV")
    exp.set_defaults(func=_cmd_export)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
