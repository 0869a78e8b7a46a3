"""
Command line entry point: create notes from templates
"""

import argparse
import asyncio
import sys
from collections.abc import Coroutine
from typing import Any

from rich.console import Console
from rich.markup import escape

from jotr import __version__
from jotr.config import get_settings
from jotr.templates import (
    Template,
    TemplateEngine,
    TemplateError,
    find_template,
    group_by_category,
)
from jotr.utils import get_logger, setup_logging
from jotr.utils.editor import EditorError
from jotr.utils.prompting import ask_choice

console = Console()
err_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jotr-template",
        description="Create notes from file-based templates.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List available templates by category.")

    new = sub.add_parser("new", help="Create a note from a template.")
    new.add_argument("name", nargs="?", help="Template name; prompts when omitted")
    new.add_argument(
        "--no-edit", action="store_true", help="Do not open the new note"
    )

    scaffold = sub.add_parser("scaffold", help="Write a starter template file.")
    scaffold.add_argument("name", help="Template name")
    scaffold.add_argument("--priority", type=int, default=1, help="Sort priority")
    scaffold.add_argument("--category", default="notes", help="Template category")
    scaffold.add_argument(
        "--no-edit", action="store_true", help="Do not open the new template"
    )

    edit = sub.add_parser("edit", help="Open a template in the editor.")
    edit.add_argument("name", help="Template name")

    delete = sub.add_parser("delete", help="Delete a template after confirmation.")
    delete.add_argument("name", help="Template name")

    return parser


def print_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        err_console.print(
            f"[yellow]Warning:[/yellow] {escape(warning)}", highlight=False
        )


def numbered_catalog(templates: list[Template]) -> list[Template]:
    """Print templates grouped by category; return them in display order."""
    ordered: list[Template] = []
    for category, members in group_by_category(templates).items():
        console.print(f"\n[bold]{escape(category)}[/bold]", highlight=False)
        for template in members:
            ordered.append(template)
            console.print(
                f"  {len(ordered)}. {escape(template.name)}", highlight=False
            )
    return ordered


async def cmd_list(engine: TemplateEngine) -> int:
    templates, warnings = await engine.load_templates()
    print_warnings(warnings)

    if not templates:
        console.print(f"No templates found in {escape(str(engine.templates_path))}")
        return 0

    console.print("Available templates:")
    numbered_catalog(templates)
    return 0


async def cmd_new(engine: TemplateEngine, args: argparse.Namespace) -> int:
    templates, warnings = await engine.load_templates()
    print_warnings(warnings)

    if not templates:
        err_console.print(f"No templates found in {escape(str(engine.templates_path))}")
        return 1

    if args.name:
        template = find_template(templates, args.name)
    else:
        ordered = numbered_catalog(templates)
        choice = await ask_choice("\nSelect template", 1, len(ordered))
        if choice is None:
            return 0
        template = ordered[choice - 1]

    created = await engine.create_note(template, open_editor=not args.no_edit)
    console.print(f"[green]Created[/green] {escape(str(created))}", highlight=False)
    return 0


async def cmd_scaffold(engine: TemplateEngine, args: argparse.Namespace) -> int:
    created = await engine.scaffold_template(
        args.name,
        priority=args.priority,
        category=args.category,
        open_editor=not args.no_edit,
    )
    console.print(
        f"[green]Created template[/green] {escape(str(created))}", highlight=False
    )
    return 0


async def cmd_edit(engine: TemplateEngine, args: argparse.Namespace) -> int:
    await engine.edit_template(args.name)
    return 0


async def cmd_delete(engine: TemplateEngine, args: argparse.Namespace) -> int:
    if await engine.delete_template(args.name):
        console.print(
            f"[green]Deleted template[/green] {escape(args.name)}", highlight=False
        )
    else:
        console.print("Cancelled")
    return 0


async def run(args: argparse.Namespace) -> int:
    engine = TemplateEngine(get_settings())

    if args.command == "list":
        return await cmd_list(engine)
    if args.command == "new":
        return await cmd_new(engine, args)
    if args.command == "scaffold":
        return await cmd_scaffold(engine, args)
    if args.command == "delete":
        return await cmd_delete(engine, args)
    return await cmd_edit(engine, args)


def run_sync(coro: Coroutine[Any, Any, int]) -> int:
    """Run ``coro`` on a fresh event loop.

    The default SIGINT handler stays in place, so Ctrl-C at a prompt raises
    KeyboardInterrupt immediately.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        asyncio.set_event_loop(None)
        loop.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging()
    logger = get_logger("cli")

    try:
        return run_sync(run(args))
    except (TemplateError, EditorError) as exc:
        logger.debug("Command failed", command=args.command, error=str(exc))
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1
    except (KeyboardInterrupt, EOFError):
        err_console.print("\nCancelled")
        return 130


if __name__ == "__main__":
    sys.exit(main())
