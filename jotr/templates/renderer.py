"""Template rendering: placeholder substitution and output path resolution"""

import re
from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path

from .builtins import apply_builtins
from .errors import TemplateError, TemplateErrorKind
from .models import Template
from .parser import PATH_DIRECTIVE_MARKER, PROMPT_PATTERN


def substitute_variables(
    content: str, user_vars: Mapping[str, str], built_ins: Mapping[str, str]
) -> str:
    """Replace ``{$name}`` tokens, then built-in tokens.

    Tokens without a value are left as they are.
    """
    result = content
    for name, value in user_vars.items():
        result = result.replace("{$" + name + "}", value)
    for token, value in built_ins.items():
        result = result.replace(token, value)
    return result


def substitute_prompts(content: str, answers: Sequence[str]) -> str:
    """Replace the i-th ``<prompt>...</prompt>`` span with ``answers[i]``.

    Spans past the last answer stay untouched; surplus answers are ignored.
    """
    position = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal position
        index = position
        position += 1
        if index < len(answers):
            return answers[index]
        return match.group(0)

    return PROMPT_PATTERN.sub(_replace, content)


def strip_path_directive(content: str) -> str:
    """Drop every line that carries a path directive."""
    lines = content.split("\n")
    return "\n".join(
        line for line in lines if not line.strip().startswith(PATH_DIRECTIVE_MARKER)
    )


def render_template(
    template: Template,
    user_vars: Mapping[str, str],
    answers: Sequence[str],
    base_dir: str | Path,
    now: datetime | None = None,
) -> str:
    """Render the note body for ``template``."""
    built_ins = apply_builtins(template, base_dir, now)
    content = substitute_variables(template.body, user_vars, built_ins)
    content = substitute_prompts(content, answers)
    return strip_path_directive(content)


def expand_home(path: str) -> Path:
    """Expand a leading ``~/`` to the current user's home directory."""
    if path.startswith("~/"):
        return Path.home() / path[2:]
    return Path(path)


def render_target_path(
    template: Template,
    user_vars: Mapping[str, str],
    base_dir: str | Path,
    now: datetime | None = None,
) -> Path:
    """Resolve where the rendered note should be written.

    Only named variables and built-ins apply here; prompts never do.
    """
    if not template.has_target_path:
        raise TemplateError(TemplateErrorKind.NO_TARGET_PATH)

    built_ins = apply_builtins(template, base_dir, now)
    path = substitute_variables(template.target_path_template, user_vars, built_ins)
    return expand_home(path)
