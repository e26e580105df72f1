"""Command-line interface for sshit.

Every lifecycle operation is its own subcommand. ``--json`` prints exactly
one JSON object on stdout; otherwise a short human-readable message is
printed. The exit code is 0 on success and 1 on failure in both modes.
"""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from sshit.services import get_settings
from sshit.tools.handlers import (
    handle_check,
    handle_create,
    handle_exec,
    handle_exit,
    handle_remove,
    handle_teardown,
    handle_validate,
    socket_path_for,
)
from sshit.utils.console import configure_logging
from sshit.utils.formatting import OUTPUT_FORMATS

logger = logging.getLogger(__name__)

USAGE_ERROR = 1

HOST_OPERATIONS = ("check", "exec", "exit", "teardown", "validate")


def _add_common_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--host", "-H", help="Host the socket belongs to (e.g. user@10.0.0.3)")
    p.add_argument(
        "--socket", "-s", dest="socket", help="Control socket path (default: derived from host)"
    )
    p.add_argument("--json", "-j", action="store_true", help="Print a single JSON object")
    p.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")


def build_parser() -> argparse.ArgumentParser:
    """Build the sshit argparse parser."""
    parser = argparse.ArgumentParser(
        prog="sshit",
        description="Manage SSH control master sockets.",
    )
    sub = parser.add_subparsers(dest="operation", metavar="<operation>")

    create_p = sub.add_parser("create", help="Start a background control master")
    _add_common_flags(create_p)
    create_p.add_argument("target", nargs="?", help="Host (alternative to --host)")
    create_p.add_argument("--timeout", "-t", type=int, help="Connect timeout in seconds")
    create_p.add_argument(
        "--server-alive-interval", type=int, help="Keep-alive interval in seconds"
    )

    check_p = sub.add_parser("check", help="Report whether a socket is alive or dead")
    _add_common_flags(check_p)

    exec_p = sub.add_parser("exec", help="Run a remote command over a socket")
    _add_common_flags(exec_p)
    exec_p.add_argument("--command", "-c", help="Remote command line")
    exec_p.add_argument("--timeout", "-t", type=int, help="Connect timeout in seconds")
    exec_p.add_argument(
        "--stdout-format",
        action="append",
        choices=OUTPUT_FORMATS,
        help="utf-8 (default) or base64; repeat to include both",
    )
    exec_p.add_argument(
        "--stderr-format",
        action="append",
        choices=OUTPUT_FORMATS,
        help="utf-8 (default) or base64; repeat to include both",
    )

    exit_p = sub.add_parser("exit", help="Ask a control master to exit")
    _add_common_flags(exit_p)

    remove_p = sub.add_parser("remove", help="Delete a socket file")
    _add_common_flags(remove_p)

    teardown_p = sub.add_parser("teardown", help="Exit the master and remove its socket")
    _add_common_flags(teardown_p)

    validate_p = sub.add_parser("validate", help="Report whether a socket is usable")
    _add_common_flags(validate_p)

    sub.add_parser("serve", help="Run the MCP server")

    return parser


async def _dispatch(args: argparse.Namespace) -> dict[str, Any]:
    op = args.operation
    if op == "create":
        return await handle_create(
            args.host,
            args.socket,
            connect_timeout=args.timeout,
            server_alive_interval=args.server_alive_interval,
        )
    if op == "check":
        return await handle_check(args.host, args.socket)
    if op == "exec":
        return await handle_exec(
            args.host,
            args.command,
            args.socket,
            timeout=args.timeout,
            stdout_formats=args.stdout_format,
            stderr_formats=args.stderr_format,
        )
    if op == "exit":
        return await handle_exit(args.host, args.socket)
    if op == "remove":
        return await handle_remove(args.socket or socket_path_for(args.host))
    if op == "teardown":
        return await handle_teardown(args.host, args.socket)
    if op == "validate":
        return await handle_validate(args.host, args.socket)
    raise ValueError(f"Unknown operation: {op}")


def _usage_problem(args: argparse.Namespace) -> str | None:
    """Return a usage message when required inputs are missing."""
    if args.operation == "create":
        if not args.host:
            return "create requires a host: sshit create <host> | --host <host>"
    elif args.operation == "remove":
        if not args.socket and not args.host:
            return "remove requires --socket <path> or --host <host>"
    elif args.operation in HOST_OPERATIONS and not args.host:
        return f"{args.operation} requires --host <host>"

    if args.operation == "exec" and not args.command:
        return "exec requires --command <cmd>"
    return None


def _print_failure(report: dict[str, Any]) -> None:
    print(f"\n❌ Failed: {report['failure']}", file=sys.stderr)
    if report.get("debugData"):
        print(report["debugData"], file=sys.stderr)


def render_human(report: dict[str, Any]) -> None:
    """Print a short annotated message for a report."""
    if not report["ok"]:
        _print_failure(report)
        return

    op = report["operation"]
    if op == "create":
        print("\n✅ Socket created successfully:")
        print(json.dumps({k: report[k] for k in ("path", "host", "createdAt")}, indent=2))
    elif op == "check":
        marker = "✅" if report["status"] == "alive" else "💀"
        print(f"\n{marker} Socket status: {report['status']}")
    elif op == "exec":
        print("\n✅ Command executed:")
        print(f"Exit code: {report['exitCode']}")
        for stream in ("stdout", "stderr"):
            text = report[stream].get("text")
            if text:
                print(f"\n--- {stream} ---")
                print(text)
    elif op == "exit":
        if report["exitedCleanly"]:
            print("\n✅ Socket exited cleanly")
        else:
            print("\n⚠️  Exit command failed (socket may already be dead)")
    elif op == "remove":
        print("\n✅ Socket file removed")
    elif op == "teardown":
        print("\n✅ Socket torn down")
        exit_note = "succeeded" if report["exitedCleanly"] else "failed (socket may have been dead)"
        print(f"   Exit command: {exit_note}")
        print(f"   File removal: {'succeeded' if report['fileRemoved'] else 'not needed'}")
    elif op == "validate":
        marker = "✅" if report["valid"] else "❌"
        print(f"\n{marker} Socket valid: {report['valid']} (status: {report['status']})")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.operation is None:
        parser.print_usage(sys.stderr)
        return USAGE_ERROR

    settings = get_settings()

    if args.operation == "serve":
        from sshit.server import run_server

        configure_logging(settings.log_level, use_colors=settings.log_colors)
        run_server(settings)
        return 0

    if args.operation == "create":
        args.host = args.host or args.target

    problem = _usage_problem(args)
    if problem:
        print(f"Usage error: {problem}", file=sys.stderr)
        return USAGE_ERROR

    if args.json:
        # stdout carries only the JSON object
        level = "CRITICAL"
    elif args.verbose:
        level = "DEBUG"
    else:
        level = settings.log_level
    configure_logging(level, use_colors=settings.log_colors)
    logger.debug("Running operation %s", args.operation)

    report = asyncio.run(_dispatch(args))

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        render_human(report)

    return 0 if report["ok"] else 1
