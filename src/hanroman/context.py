"""
Cancellation and progress plumbing shared by every stage.

A single CancellationContext is threaded through one pipeline invocation.
Cancellation is cooperative: stages poll `check()` at entry and every
CANCEL_CHECK_INTERVAL items; nothing is ever preempted.
"""

import threading
import time
from typing import Callable, Optional

from tqdm import tqdm

from src.hanroman.errors import CancellationError


# Stages poll the cancellation signal at least once per this many items
CANCEL_CHECK_INTERVAL = 100

# (processed, total) -> None
ProgressCallback = Callable[[int, int], None]


class CancellationContext:
    """
    Shared cancellation signal with an optional deadline.

    Usage:
        ctx = CancellationContext(timeout=5.0)
        pipeline.process(ctx, OperatingMode.TRANSLITERATE, tokens)

        # from another thread or a progress callback
        ctx.cancel("user pressed stop")
    """

    def __init__(self, timeout: Optional[float] = None, deadline: Optional[float] = None):
        """
        Args:
            timeout: Seconds from now after which the context counts as cancelled
            deadline: Absolute `time.monotonic()` value; wins over timeout if both given
        """
        if deadline is None and timeout is not None:
            deadline = time.monotonic() + timeout
        self.deadline = deadline
        self._event = threading.Event()
        self._reason = ""

    @classmethod
    def background(cls) -> "CancellationContext":
        """Context that is never cancelled unless `cancel()` is called."""
        return cls()

    def cancel(self, reason: str = "cancelled") -> None:
        self._reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def reason(self) -> str:
        if self._event.is_set():
            return self._reason
        if self.cancelled:
            return "deadline exceeded"
        return ""

    def check(self, where: str = "") -> None:
        """Raise CancellationError if the context is cancelled."""
        if self.cancelled:
            location = f" during {where}" if where else ""
            raise CancellationError(f"context {self.reason}{location}")


class ProgressReporter:
    """
    Combines per-stage progress into one monotonic stream for the caller.

    Each stage reports against its own total (chunks for the tokenizer,
    tokens for the transliterator). The reporter shifts a stage's numbers by
    the units completed in earlier stages, clamps `processed` to `total`,
    and never lets `processed` go backwards.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self._callback = callback
        self._offset = 0
        self._processed = 0
        self._total = 0

    def stage_callback(self) -> ProgressCallback:
        offset = self._offset

        def report(processed: int, total: int) -> None:
            total = max(total, 0)
            processed = min(max(processed, 0), total)
            self._emit(offset + processed, offset + total)

        return report

    def finish_stage(self) -> None:
        """Freeze the units reported so far as the offset for the next stage."""
        self._offset = self._total

    def _emit(self, processed: int, total: int) -> None:
        processed = max(processed, self._processed)
        total = max(total, processed)
        self._processed = processed
        self._total = total
        if self._callback is not None:
            self._callback(processed, total)


class TqdmProgress:
    """
    Progress callback that drives a tqdm bar.

    The bar's total follows the reported total, which grows when the
    pipeline moves from the tokenizer stage to the transliterator stage.

    Usage:
        with TqdmProgress("Romanizing") as progress:
            pipeline.with_progress_callback(progress)
            pipeline.roman(text)
    """

    def __init__(self, desc: str = "Romanizing", **kwargs):
        self.bar = tqdm(total=0, desc=desc, unit="item", **kwargs)

    def __call__(self, processed: int, total: int) -> None:
        if self.bar.total != total:
            self.bar.total = total
        self.bar.n = processed
        self.bar.refresh()

    def close(self) -> None:
        self.bar.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
