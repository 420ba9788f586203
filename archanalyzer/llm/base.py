"""Base class for chat-completion provider strategies."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..prompting.builder import PromptMessage


class ChatProvider(ABC):
    """Contract for providers that turn a conversation into report text."""

    name: str = ""

    @abstractmethod
    def complete(self, messages: Sequence[PromptMessage], credential: str) -> str:
        """Send ``messages`` with ``credential`` and return the model's answer.

        Implementations raise :class:`~archanalyzer.errors.ProviderError` when
        the provider rejects the request or cannot be reached.
        """
