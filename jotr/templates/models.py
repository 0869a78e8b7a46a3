"""
Template data models
"""

from pydantic import BaseModel, ConfigDict, Field


class Variable(BaseModel):
    """Named placeholder declared as ``name = <prompt>question</prompt>``"""

    model_config = ConfigDict(frozen=True)

    name: str
    prompt: str


class Prompt(BaseModel):
    """Unnamed ``<prompt>question</prompt>`` resolved by position"""

    model_config = ConfigDict(frozen=True)

    question: str


class Template(BaseModel):
    """A parsed template file.

    Fields cannot be reassigned after parsing. ``built_ins`` is the one
    exception in spirit: its contents are refreshed on every render.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    priority: int
    category: str
    name: str
    body: str
    target_path_template: str = ""
    variables: list[Variable] = Field(default_factory=list)
    prompts: list[Prompt] = Field(default_factory=list)
    built_ins: dict[str, str] = Field(default_factory=dict)

    @property
    def has_target_path(self) -> bool:
        return bool(self.target_path_template)

    @property
    def display_name(self) -> str:
        return f"{self.category}/{self.name}"

    @property
    def stem(self) -> str:
        return self.filename.removesuffix(".md")
