"""Builds the architecture report prompt from a project digest."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import Digest
from .constants import PROMPT_TEMPLATE, REPORT_SECTIONS, SYSTEM_PROMPT


@dataclass(frozen=True)
class PromptMessage:
    """Represents a single chat message for LLM prompting."""

    role: str
    content: str


class PromptBuilder:
    """Renders the fixed report template with the digest appended verbatim."""

    SYSTEM_PROMPT = SYSTEM_PROMPT

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def build(self, digest: Digest | str) -> str:
        """Return the user prompt for ``digest``."""
        template = self._env.get_template(PROMPT_TEMPLATE)
        text = digest.text if isinstance(digest, Digest) else digest
        return template.render(sections=REPORT_SECTIONS, digest=text)

    def build_messages(self, digest: Digest | str) -> List[PromptMessage]:
        """Return the system + user conversation sent to the provider."""
        return [
            PromptMessage(role="system", content=self.SYSTEM_PROMPT),
            PromptMessage(role="user", content=self.build(digest)),
        ]


__all__ = ["PromptBuilder", "PromptMessage"]
