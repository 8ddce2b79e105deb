"""
Admin CLI for DevSync.

Usage:
    devsync init-db
    devsync check
    devsync audit-connections
    devsync repair-connections [--dry-run]

All output is JSON. Exit codes: 0=success, 1=problem found, 2=error.
"""
import argparse
import json
import sys
from typing import Any, Dict


def _output(data: Dict[str, Any], exit_code: int = 0):
    """Print JSON output and exit."""
    print(json.dumps(data, indent=2, default=str))
    sys.exit(exit_code)


def cmd_init_db(args):
    """Handle init-db subcommand."""
    from devsync.database import init_db

    init_db()
    _output({"success": True, "message": "Database initialized"})


def cmd_check(args):
    """Handle check subcommand."""
    from devsync.database import check_connection

    status = check_connection()
    _output(status, exit_code=0 if status.get("status") == "connected" else 2)


def cmd_audit_connections(args):
    """Handle audit-connections subcommand."""
    from devsync.errors import is_error
    from devsync.services import audit_connections

    result = audit_connections()
    if is_error(result):
        _output(result, exit_code=2)
    _output(result, exit_code=0 if result["symmetric"] else 1)


def cmd_repair_connections(args):
    """Handle repair-connections subcommand."""
    from devsync.errors import is_error
    from devsync.services import repair_connections

    result = repair_connections(dry_run=args.dry_run)
    _output(result, exit_code=2 if is_error(result) else 0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devsync",
        description="DevSync administration",
    )
    sub = parser.add_subparsers(dest="command")

    p_init = sub.add_parser("init-db", help="Create database tables")
    p_init.set_defaults(func=cmd_init_db)

    p_check = sub.add_parser("check", help="Check database connectivity")
    p_check.set_defaults(func=cmd_check)

    p_audit = sub.add_parser("audit-connections", help="Report one-sided connection edges")
    p_audit.set_defaults(func=cmd_audit_connections)

    p_repair = sub.add_parser("repair-connections", help="Write missing mirror edges")
    p_repair.add_argument("--dry-run", action="store_true", help="Report without writing")
    p_repair.set_defaults(func=cmd_repair_connections)

    return parser


def main(argv=None):
    from devsync.logging_setup import init_logging

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        sys.exit(2)

    init_logging()
    args.func(args)


if __name__ == "__main__":
    main()
