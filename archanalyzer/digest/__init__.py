"""Project structure digest construction."""

from .builder import DigestBuilder, build_digest

__all__ = ["DigestBuilder", "build_digest"]
