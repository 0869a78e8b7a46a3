"""Line-reading helpers for operator input.

Reads run on the event loop thread, so Ctrl-C at a prompt raises
KeyboardInterrupt out of ``input()`` at once.
"""

from rich.console import Console
from rich.prompt import Prompt

_console = Console()


async def ask_required(question: str, console: Console | None = None) -> str:
    """Ask ``question`` until a non-empty answer is given.

    EOFError and KeyboardInterrupt propagate to the caller.
    """
    console = console or _console
    while True:
        answer = Prompt.ask(question, console=console).strip()
        if answer:
            return answer
        console.print("[yellow]Input required, please try again.[/yellow]")


async def ask_line(question: str, console: Console | None = None) -> str:
    """Ask ``question`` once; an empty answer is returned as ``""``."""
    console = console or _console
    return Prompt.ask(question, console=console, default="", show_default=False)


async def ask_choice(
    question: str, low: int, high: int, console: Console | None = None
) -> int | None:
    """Ask for a number in ``[low, high]``; an empty answer returns None."""
    console = console or _console
    while True:
        answer = Prompt.ask(
            question, console=console, default="", show_default=False
        ).strip()
        if not answer:
            return None
        if answer.isdigit() and low <= int(answer) <= high:
            return int(answer)
        console.print(
            f"[yellow]Please enter a number between {low} and {high}.[/yellow]"
        )
