"""Host adapters that display progress, results and errors for a run."""

from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import List, Optional, Protocol, TextIO, runtime_checkable

from .logging import get_logger


@runtime_checkable
class Host(Protocol):
    """Capabilities the orchestrator needs from its environment."""

    def report_progress(self, message: str) -> None: ...

    def is_cancelled(self) -> bool: ...

    def show_result(self, text: str) -> None: ...

    def show_error(self, text: str) -> None: ...


class CancellationToken:
    """Thread-safe flag signalling that a run should stop."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class ConsoleHost:
    """Terminal host: progress goes to the log, the report to stdout or a file."""

    def __init__(
        self,
        output: Path | None = None,
        *,
        token: CancellationToken | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.output = output
        self.token = token or CancellationToken()
        self._stdout = stdout
        self._stderr = stderr
        self.logger = get_logger("host")

    def report_progress(self, message: str) -> None:
        self.logger.info(message)

    def is_cancelled(self) -> bool:
        return self.token.cancelled

    def show_result(self, text: str) -> None:
        if self.output is not None:
            self.output.parent.mkdir(parents=True, exist_ok=True)
            self.output.write_text(text, encoding="utf-8")
            self.logger.info("Report written to %s", self.output)
            return
        stream = self._stdout or sys.stdout
        stream.write(text if text.endswith("\n") else f"{text}\n")
        stream.flush()

    def show_error(self, text: str) -> None:
        stream = self._stderr or sys.stderr
        stream.write(f"{text}\n")
        stream.flush()


class RecordingHost:
    """In-memory host that keeps everything it is shown."""

    def __init__(self, token: CancellationToken | None = None) -> None:
        self.token = token or CancellationToken()
        self.progress: List[str] = []
        self.result: Optional[str] = None
        self.error: Optional[str] = None

    def report_progress(self, message: str) -> None:
        self.progress.append(message)

    def is_cancelled(self) -> bool:
        return self.token.cancelled

    def show_result(self, text: str) -> None:
        self.result = text

    def show_error(self, text: str) -> None:
        self.error = text


__all__ = ["CancellationToken", "ConsoleHost", "Host", "RecordingHost"]
