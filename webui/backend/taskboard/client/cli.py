"""Command-line board client

Drives a BoardController against a running Taskboard server, prints the
resulting board and optionally writes it out as a standalone HTML page.

Usage:
    taskboard-board show --output board.html
    taskboard-board add "Write report" --description "Q3 numbers" --status in-progress
    taskboard-board edit <task-id> --status completed
    taskboard-board delete <task-id> --yes
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import httpx

from .. import config
from ..models.task import TASK_STATUSES
from .controller import BoardController
from .render import format_status, render_page

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = f"http://localhost:{config.port()}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskboard-board",
        description="View and change the task board of a running Taskboard server",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"Server address (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="Request timeout in seconds (default: 10)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write the rendered board to this HTML file",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("show", help="Load and print the board")

    add = commands.add_parser("add", help="Create a task")
    add.add_argument("title")
    add.add_argument("--description", default="")
    add.add_argument("--status", choices=TASK_STATUSES, default="pending")

    edit = commands.add_parser("edit", help="Update a task")
    edit.add_argument("task_id")
    edit.add_argument("--title", help="New title (default: keep current)")
    edit.add_argument("--description", help="New description (default: keep current)")
    edit.add_argument("--status", choices=TASK_STATUSES, help="New status (default: keep current)")

    delete = commands.add_parser("delete", help="Delete a task")
    delete.add_argument("task_id")
    delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    return parser


def ask(message: str) -> bool:
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


async def _apply(board: BoardController, args: argparse.Namespace) -> bool:
    """Run the requested action; False when it failed"""
    if args.command == "show":
        return board.state.load_error is None

    if args.command == "add":
        return await board.create(args.title, args.description, args.status) is not None

    if args.command == "edit":
        index = board.state.find_index(args.task_id)
        current = board.state.tasks[index] if index != -1 else {}
        board.edit(args.task_id)
        task = await board.save_edit(
            args.task_id,
            args.title if args.title is not None else current.get("title", ""),
            args.description if args.description is not None else current.get("description", ""),
            args.status or current.get("status", "pending"),
        )
        return task is not None

    if args.command == "delete":
        return await board.delete(args.task_id)

    raise ValueError(f"Unknown command: {args.command}")


def print_board(board: BoardController):
    view = board.view
    print(view.connection_text)
    if board.state.load_error is not None:
        print(f"Failed to load tasks: {board.state.load_error}")
    print(view.summary)
    for task in board.state.tasks:
        print(f"  [{format_status(task.get('status', ''))}] {task.get('title')}  ({task.get('id')})")
    if board.state.banners:
        print(board.state.banners[-1].text)


async def run(args: argparse.Namespace, transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    """Execute one command against the server; returns the exit code"""
    confirm = (lambda message: True) if getattr(args, "yes", False) else ask

    async with httpx.AsyncClient(base_url=args.base_url, transport=transport, timeout=args.timeout) as http:
        board = BoardController(http, confirm=confirm)
        try:
            await board.start()
            ok = await _apply(board, args)
        finally:
            await board.close()

    print_board(board)
    if args.output:
        args.output.write_text(render_page(board.view), encoding="utf-8")
        logger.info(f"Board written to {args.output}")
    return 0 if ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
