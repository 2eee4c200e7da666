"""mbx: terminal client for a website contact form mailbox."""

from __future__ import annotations

import argparse
import logging
import sys

from mbx import __version__
from mbx.cli.api_client import APIError, MailboxAPIClient, ServerError
from mbx.cli.pagination import fetch_all_entries
from mbx.cli.tui.driver import run_session
from mbx.cli.tui.views.browse import BrowseView
from mbx.cli.tui.views.compose import ComposeView
from mbx.config import ClientConfig, ConfigError, load_env, resolve_config
from mbx.logging_config import setup_logging

logger = logging.getLogger(__name__)

DESCRIPTION = """\
Mailbox is a CLI tool for managing website contact forms.
It interacts with a remote API server to fetch and modify
submissions."""


def _add_connection_flags(parser: argparse.ArgumentParser, default: object = None) -> None:
    parser.add_argument("--api", default=default, help="(Required) HTTP API endpoint")
    parser.add_argument("--usr", default=default, help="(Optional) Your basic auth username")
    parser.add_argument("--pwd", default=default, help="(Optional) Your basic auth password")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mbx", description=DESCRIPTION)
    _add_connection_flags(parser)
    # Accepted after the subcommand too; SUPPRESS keeps a value given before it.
    common = argparse.ArgumentParser(add_help=False)
    _add_connection_flags(common, default=argparse.SUPPRESS)
    sub = parser.add_subparsers(dest="command", metavar="command")

    sub.add_parser("browse", parents=[common], help="Browse contact form submissions")

    new = sub.add_parser("new", parents=[common], help="Submit a new message to the contact form")
    new.add_argument("-f", "--from", dest="sender", default="", help="The source email address")
    new.add_argument("-s", "--sub", dest="subject", default="", help="The message subject")
    new.add_argument("-m", "--msg", dest="message", default="", help="The message body")

    get = sub.add_parser("get", parents=[common], help="Fetch a contact form submission")
    get.add_argument("id", help="Submission ID")

    sub.add_parser("version", help="Print the version number of Mailbox")
    return parser


def _fail(message: str) -> None:
    print(message, file=sys.stderr)
    sys.exit(1)


def _report_api_error(exc: APIError) -> None:
    """Print an API failure the way every command reports it, then exit 1."""
    if isinstance(exc, ServerError):
        print(f"Server error: {exc.status_line}", file=sys.stderr)
        _fail(str(exc))
    _fail(f"Error: {exc}")


def _client(config: ClientConfig) -> MailboxAPIClient:
    return MailboxAPIClient(config.api, config.usr, config.pwd)


def browse(config: ClientConfig, api: MailboxAPIClient) -> None:
    """Load every entry and open the browse table."""
    try:
        rows = fetch_all_entries(api)
    except APIError as e:
        logger.error("Initial load failed: %s", e)
        _report_api_error(e)
        return

    if not rows:
        _fail("No submissions found")
        return

    run_session(BrowseView(api, rows, height=config.table_height))


def submit(api: MailboxAPIClient, sender: str, subject: str, message: str) -> None:
    """Create one entry and exit 0 on success, 1 on any failure."""
    try:
        api.create_entry(sender, subject, message)
    except APIError as e:
        logger.error("Submission failed: %s", e)
        _report_api_error(e)
        return
    print("(success)")
    sys.exit(0)


def new(api: MailboxAPIClient, sender: str, subject: str, message: str) -> None:
    """Submit directly when every field is given, else open the form."""
    if sender and subject and message:
        submit(api, sender, subject, message)
        return

    view = ComposeView(sender, subject, message)
    run_session(view)
    result = view.result
    if result is None or result.entry is None:
        sys.exit(0)
    entry = result.entry
    submit(api, entry.sender, entry.subject, entry.message)


def get(api: MailboxAPIClient, entry_id: str) -> None:
    """Print one entry's raw JSON."""
    try:
        body = api.get_entry(entry_id)
    except APIError as e:
        _report_api_error(e)
        return
    print(body)


def _main_impl(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)
    if args.command == "version":
        print(f"Mailbox: v{__version__}")
        return

    load_env()
    try:
        config = resolve_config(args.api, args.usr, args.pwd)
    except ConfigError as e:
        _fail(f"Error: {e}")
        return
    setup_logging(config.log_level)
    api = _client(config)

    if args.command == "browse":
        browse(config, api)
    elif args.command == "new":
        new(api, args.sender, args.subject, args.message)
    elif args.command == "get":
        get(api, args.id)


def main(argv: list[str] | None = None) -> None:
    try:
        _main_impl(argv)
    except KeyboardInterrupt:
        sys.exit(130)
