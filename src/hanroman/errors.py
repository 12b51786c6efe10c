"""
Error taxonomy for the romanization pipeline.

Every error raised by a stage carries the stage name and the operation that
failed (initialize / process / release) once it leaves the pipeline, while
keeping its original class so callers can still tell a cancellation from a
corrupted oracle answer:

    try:
        pipeline.process(ctx, OperatingMode.TRANSLITERATE, tokens)
    except CancellationError:
        ...  # caller decides whether to retry
    except ConsistencyError as err:
        print(err.stage, err.operation)
"""

from typing import Optional


class TranslitError(Exception):
    """Base class for all pipeline errors."""

    def __init__(
        self,
        message: str,
        *,
        stage: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        self.detail = message
        self.stage = stage
        self.operation = operation
        super().__init__(self._format())

    def _format(self) -> str:
        if self.stage and self.operation:
            return f"{self.stage}: {self.operation} failed: {self.detail}"
        if self.stage:
            return f"{self.stage}: {self.detail}"
        return self.detail

    def with_stage(self, stage: str, operation: str) -> "TranslitError":
        """
        Return a copy of this error tagged with stage name and operation.

        The copy has the same class as the original. Errors already tagged
        by an inner stage keep their tag.
        """
        if self.stage is not None:
            return self
        return type(self)(self.detail, stage=stage, operation=operation)


class CancellationError(TranslitError):
    """The shared cancellation signal or deadline interrupted a stage."""


class InitializationError(TranslitError):
    """A stage's oracle/engine failed to start."""


class ConsistencyError(TranslitError):
    """Oracle output violates an expected invariant (e.g. tag count mismatch)."""


class UnsupportedTokenError(TranslitError):
    """
    A token is not of the specialized type a stage works on.

    Recovered locally by the transliterator stage (identity romanization),
    never propagated to the pipeline caller.
    """


class ProcessingError(TranslitError):
    """Unexpected failure while a stage was processing its input."""


class ReleaseError(TranslitError):
    """A stage failed to release its resources."""


class RegistrationError(TranslitError):
    """Invalid or duplicate registry write, or lookup of an unknown entry."""


class ConfigurationError(TranslitError):
    """Invalid options or an unusable provider chain."""


class ChunkingError(TranslitError):
    """Input could not be split into chunks within the maximum input length."""


# Error class used to wrap foreign exceptions raised during each operation
OPERATION_ERRORS = {
    "initialize": InitializationError,
    "process": ProcessingError,
    "release": ReleaseError,
}
