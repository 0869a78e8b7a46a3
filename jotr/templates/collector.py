"""Operator input collection for template variables and prompts"""

from collections.abc import Awaitable, Callable, Sequence

import structlog

from .models import Prompt, Variable

logger = structlog.get_logger(__name__)

PromptReader = Callable[[str], Awaitable[str]]


async def collect_variable_values(
    variables: Sequence[Variable], reader: PromptReader
) -> dict[str, str]:
    """Ask for every declared variable in order; any read failure propagates."""
    values: dict[str, str] = {}
    for variable in variables:
        values[variable.name] = await reader(variable.prompt)

    logger.debug("Collected variable values", count=len(values))
    return values


async def collect_prompt_values(
    prompts: Sequence[Prompt], reader: PromptReader
) -> list[str]:
    """Ask every positional prompt in order, returning answers by position."""
    answers = [await reader(prompt.question) for prompt in prompts]

    logger.debug("Collected prompt answers", count=len(answers))
    return answers
