from __future__ import annotations

import argparse
import sys

from . import __description__, __title__
from .commands import (
    LIST_FORMATS,
    AddCommand,
    Command,
    CompleteCommand,
    DeleteCommand,
    ListCommand,
    VersionCommand,
)
from .models import DEFAULT_PRIORITY
from .observability import configure_logging
from .render import use_color
from .settings import Settings, get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(__title__, description=__description__)
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_add = sub.add_parser("add", help="Add a new todo item")
    p_add.add_argument("text", help="Text of the todo item")
    p_add.add_argument("--priority", default=DEFAULT_PRIORITY, help="Priority: high, medium, or low")

    p_list = sub.add_parser("list", help="List todos")
    p_list.add_argument("-a", "--all", action="store_true", help="Show completed todos too")
    p_list.add_argument("--format", choices=LIST_FORMATS, default="table", help="Output format: table or json")

    p_complete = sub.add_parser("complete", help="Mark a todo as completed")
    p_complete.add_argument("id", type=int, help="ID of the todo to complete")

    p_delete = sub.add_parser("delete", help="Delete a todo")
    p_delete.add_argument("id", type=int, help="ID of the todo to delete")

    p_version = sub.add_parser("version", help="Display version information")
    p_version.add_argument("--json", action="store_true", help="Output version info as JSON")
    return parser


def _build_command(args: argparse.Namespace, settings: Settings) -> Command:
    if args.cmd == "add":
        return AddCommand(args.text, args.priority)
    if args.cmd == "list":
        return ListCommand(args.all, args.format, color=use_color(settings.color, sys.stdout))
    if args.cmd == "complete":
        return CompleteCommand(args.id)
    if args.cmd == "delete":
        return DeleteCommand(args.id)
    return VersionCommand(args.json)


# PUBLIC_INTERFACE
def main(argv: list[str] | None = None) -> int:
    """
    Parse ``argv``, run one command and print its output.

    Returns the process exit code: 0 when the command completed its protocol
    (including 'not found' and 'already completed'), 1 on a storage fault,
    2 on invalid input.
    """
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    result = _build_command(args, settings).execute(settings)
    if result.output:
        stream = sys.stderr if result.exit_code else sys.stdout
        print(result.output, file=stream)
    return result.exit_code
