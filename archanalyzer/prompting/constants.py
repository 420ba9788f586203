"""Shared constants for architecture report prompting."""

from __future__ import annotations

SYSTEM_PROMPT = "You are a software architect specialised in source code analysis."

REPORT_SECTIONS: tuple[tuple[str, str], ...] = (
    ("Application Type", "Web, API, Desktop, Mobile, etc."),
    ("Technology Stack", "Languages, frameworks and main libraries"),
    (
        "Architecture",
        "Architectural patterns identified (MVC, Clean Architecture, Microservices, etc.)",
    ),
    ("Folder Structure", "Organisation and conventions"),
    ("Database", "If present, which kind and which ORM is used"),
    ("APIs and Integrations", "External services integrated"),
    ("Build and Deploy", "Build tooling and containerisation"),
    ("Strengths", "What is well architected"),
    ("Improvement Suggestions", "Refactoring or optimisation opportunities"),
)

PROMPT_TEMPLATE = "analysis_prompt.md.j2"


__all__ = ["PROMPT_TEMPLATE", "REPORT_SECTIONS", "SYSTEM_PROMPT"]
