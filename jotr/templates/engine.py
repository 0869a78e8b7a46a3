"""Main template engine combining all template system components"""

import asyncio
from datetime import datetime
from pathlib import Path

import aiofiles.os

from jotr.config import Settings, get_settings
from jotr.utils.editor import open_in_editor
from jotr.utils.mixins import LoggerMixin
from jotr.utils.prompting import ask_line, ask_required

from .collector import PromptReader, collect_prompt_values, collect_variable_values
from .creator import create_and_open, create_from_template
from .discovery import find_template, load_templates
from .errors import TemplateError, TemplateErrorKind
from .models import Template
from .parser import parse_filename
from .renderer import render_target_path, render_template

STARTER_TEMPLATE = """<!-- Path: {{$base_dir}}/{name}/{{$date}}.md -->
# {title} - {{$date}}

## Summary

<prompt>What is this note about?</prompt>

## Notes

"""


class TemplateEngine(LoggerMixin):
    """Discovery, input collection, rendering and materialization in one place"""

    def __init__(
        self,
        settings: Settings | None = None,
        reader: PromptReader | None = None,
        confirm_reader: PromptReader | None = None,
    ):
        self.settings = settings or get_settings()
        self.reader = reader or ask_required
        self.confirm_reader = confirm_reader or ask_line

    @property
    def templates_path(self) -> Path:
        return self.settings.templates_path

    async def load_templates(self) -> tuple[list[Template], list[str]]:
        """Sorted catalog plus warnings for skipped files"""
        return await load_templates(self.settings)

    async def get_template(self, query: str) -> Template:
        templates, _ = await self.load_templates()
        return find_template(templates, query)

    async def collect_values(
        self, template: Template
    ) -> tuple[dict[str, str], list[str]]:
        """Ask for variables first, then positional prompts."""
        user_vars = await collect_variable_values(template.variables, self.reader)
        answers = await collect_prompt_values(template.prompts, self.reader)
        return user_vars, answers

    def render(
        self,
        template: Template,
        user_vars: dict[str, str],
        answers: list[str],
        now: datetime | None = None,
    ) -> tuple[str, Path]:
        """Render body and target path from one timestamp sample."""
        if now is None:
            now = datetime.now()

        base_dir = self.settings.base_path
        content = render_template(template, user_vars, answers, base_dir, now)
        target_path = render_target_path(template, user_vars, base_dir, now)
        return content, target_path

    async def create_note(
        self,
        template: Template,
        *,
        open_editor: bool = True,
        cancel_event: asyncio.Event | None = None,
        now: datetime | None = None,
    ) -> Path:
        """Run the full pipeline for ``template`` and return the new file."""
        # Fail before asking anything if there is nowhere to write
        if not template.has_target_path:
            raise TemplateError(
                TemplateErrorKind.NO_TARGET_PATH, template=template.filename
            )

        self.logger.info("Creating note from template", template=template.filename)

        user_vars, answers = await self.collect_values(template)
        content, target_path = self.render(template, user_vars, answers, now)
        if open_editor:
            return await create_and_open(
                content, target_path, self.settings.resolved_editor, cancel_event
            )
        return await create_from_template(content, target_path, cancel_event)

    async def scaffold_template(
        self,
        name: str,
        priority: int = 1,
        category: str = "notes",
        open_editor: bool = True,
    ) -> Path:
        """Write a starter ``{priority}-{category}-{name}.md`` template."""
        if (
            priority < 0
            or "-" in category
            or not name.strip()
            or "/" in name
            or "\\" in name
        ):
            raise TemplateError(
                TemplateErrorKind.INVALID_FILENAME,
                f"{priority}-{category}-{name}.md",
            )

        filename = f"{priority}-{category}-{name}.md"
        parse_filename(filename)

        content = STARTER_TEMPLATE.format(name=name, title=name.replace("-", " "))
        created = await create_from_template(content, self.templates_path / filename)

        if open_editor:
            await open_in_editor(created, self.settings.resolved_editor)
        return created

    async def edit_template(self, query: str) -> Path:
        """Open an existing template file in the editor."""
        template = await self.get_template(query)
        path = self.templates_path / template.filename
        await open_in_editor(path, self.settings.resolved_editor)
        return path

    async def delete_template(self, query: str) -> bool:
        """Delete a template after a y/N confirmation.

        Returns False when the operator declines. Any answer other than
        ``y`` or ``Y`` declines.
        """
        template = await self.get_template(query)
        path = self.templates_path / template.filename

        answer = await self.confirm_reader(
            f"Delete template '{template.display_name}'? (y/N)"
        )
        if answer.strip() not in ("y", "Y"):
            self.logger.info("Template deletion declined", template=template.filename)
            return False

        try:
            await aiofiles.os.remove(path)
        except OSError as e:
            raise TemplateError(
                TemplateErrorKind.DELETE_FAILED, f"{path}: {e}"
            ) from e

        self.logger.info("Template deleted", path=str(path))
        return True
