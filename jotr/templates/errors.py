"""Template system error kinds"""

from enum import Enum


class TemplateErrorKind(Enum):
    """Closed set of failures the template pipeline can report"""

    TEMPLATE_NOT_FOUND = "template not found"
    INVALID_FILENAME = "invalid template filename format"
    PARSE_FAILED = "failed to parse template"
    VARIABLE_CONFLICT = "variable defined multiple times"
    INVALID_PATH_SYNTAX = "invalid path syntax in <!-- Path: -->"
    NO_TARGET_PATH = "template has no target path"
    DIRECTORY_CREATE_FAILED = "creating directory"
    TARGET_EXISTS = "file already exists"
    WRITE_FAILED = "writing file"
    DELETE_FAILED = "deleting template"


class TemplateError(Exception):
    """A template pipeline failure tagged with its :class:`TemplateErrorKind`.

    ``template`` is set to the offending filename where one is known, e.g. for
    variable conflicts detected while parsing.
    """

    def __init__(
        self,
        kind: TemplateErrorKind,
        detail: str = "",
        *,
        template: str | None = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.template = template
        super().__init__(str(self))

    def __str__(self) -> str:
        message = self.kind.value
        if self.detail:
            message = f"{message}: {self.detail}"
        if self.template:
            message = f"template {self.template}: {message}"
        return message

    def is_kind(self, kind: TemplateErrorKind) -> bool:
        return self.kind is kind

    def with_template(self, template: str) -> "TemplateError":
        """Return a copy of this error attributed to ``template``."""
        return TemplateError(self.kind, self.detail, template=template)
