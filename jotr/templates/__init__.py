"""Template system for jotr notes"""

from .builtins import resolve_builtins
from .collector import collect_prompt_values, collect_variable_values
from .creator import create_and_open, create_from_template
from .discovery import (
    discover_templates,
    find_template,
    group_by_category,
    load_templates,
    sort_templates,
)
from .engine import TemplateEngine
from .errors import TemplateError, TemplateErrorKind
from .models import Prompt, Template, Variable
from .parser import (
    parse_filename,
    parse_path_directive,
    parse_prompts,
    parse_template,
    parse_variables,
)
from .renderer import (
    render_target_path,
    render_template,
    substitute_prompts,
    substitute_variables,
)

__all__ = [
    "Prompt",
    "Template",
    "TemplateEngine",
    "TemplateError",
    "TemplateErrorKind",
    "Variable",
    "collect_prompt_values",
    "collect_variable_values",
    "create_and_open",
    "create_from_template",
    "discover_templates",
    "find_template",
    "group_by_category",
    "load_templates",
    "parse_filename",
    "parse_path_directive",
    "parse_prompts",
    "parse_template",
    "parse_variables",
    "render_target_path",
    "render_template",
    "resolve_builtins",
    "sort_templates",
    "substitute_prompts",
    "substitute_variables",
]
