"""Template filename and content parsing"""

import re
from pathlib import Path

from .errors import TemplateError, TemplateErrorKind
from .models import Prompt, Template, Variable

PATH_DIRECTIVE_MARKER = "<!-- Path:"
PATH_DIRECTIVE_END = "-->"

# A declaration's prompt is also matched by PROMPT_PATTERN; answers are
# aligned with that combined list.
VARIABLE_PATTERN = re.compile(r"^(\w+)\s*=\s*<prompt>(.*?)</prompt>", re.ASCII)
PROMPT_PATTERN = re.compile(r"<prompt>(.*?)</prompt>")

_PRIORITY_PATTERN = re.compile(r"[0-9]+")


def parse_filename(filename: str) -> tuple[int, str, str]:
    """Split ``{priority}-{category}-{name...}.md`` into its parts."""
    base = filename.removesuffix(".md")
    parts = base.split("-")
    if len(parts) < 3:
        raise TemplateError(TemplateErrorKind.INVALID_FILENAME, filename)

    if not _PRIORITY_PATTERN.fullmatch(parts[0]):
        raise TemplateError(TemplateErrorKind.INVALID_FILENAME, "invalid priority")

    return int(parts[0]), parts[1], "-".join(parts[2:])


def parse_path_directive(content: str) -> str:
    """Return the path template from the first ``<!-- Path: ... -->`` line.

    An absent directive yields ``""``; a present but empty one is an error.
    """
    for line in content.split("\n"):
        line = line.strip()
        if not line.startswith(PATH_DIRECTIVE_MARKER):
            continue

        path = line.removeprefix(PATH_DIRECTIVE_MARKER).strip()
        path = path.removesuffix(PATH_DIRECTIVE_END).strip()
        if not path:
            raise TemplateError(TemplateErrorKind.INVALID_PATH_SYNTAX, "empty path")
        return path

    return ""


def parse_variables(content: str) -> list[Variable]:
    """Collect ``name = <prompt>...</prompt>`` declarations in document order."""
    variables: list[Variable] = []
    seen: set[str] = set()

    for line in content.split("\n"):
        match = VARIABLE_PATTERN.match(line)
        if match is None:
            continue

        name, prompt = match.group(1), match.group(2)
        if name in seen:
            raise TemplateError(TemplateErrorKind.VARIABLE_CONFLICT, name)
        seen.add(name)
        variables.append(Variable(name=name, prompt=prompt))

    return variables


def parse_prompts(content: str) -> list[Prompt]:
    """Collect every ``<prompt>...</prompt>`` span in textual order."""
    return [Prompt(question=question) for question in PROMPT_PATTERN.findall(content)]


def parse_template(path: str | Path, content: str) -> Template:
    """Build a :class:`Template` from a file path and its text."""
    filename = Path(path).name
    priority, category, name = parse_filename(filename)
    target_path_template = parse_path_directive(content)

    try:
        variables = parse_variables(content)
    except TemplateError as e:
        raise e.with_template(filename) from e

    return Template(
        filename=filename,
        priority=priority,
        category=category,
        name=name,
        body=content,
        target_path_template=target_path_template,
        variables=variables,
        prompts=parse_prompts(content),
        built_ins={},
    )
