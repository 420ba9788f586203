"""Prompt composition for architecture reports."""

from .builder import PromptBuilder
from .constants import REPORT_SECTIONS, SYSTEM_PROMPT

__all__ = ["PromptBuilder", "REPORT_SECTIONS", "SYSTEM_PROMPT"]
