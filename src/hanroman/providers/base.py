"""
Base Provider - Abstract Stage Interface

Every pipeline stage (tokenizer or transliterator) implements this interface.
The base class owns the lifecycle bookkeeping so that concrete providers only
load/unload their engine and process items:

- initialize() is lazy and idempotent: the engine is loaded once
- reinitialize() drops the engine and loads a new one
- release() frees the engine; releasing twice is a no-op
- configure() merges and validates options; if they changed, a loaded engine
  is dropped so the next initialize() picks them up
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Type
from logging import getLogger

from pydantic import BaseModel, ConfigDict, ValidationError

from src.hanroman.context import CancellationContext, ProgressCallback
from src.hanroman.errors import ConfigurationError
from src.hanroman.tokens.types import TokenSequence

logger = getLogger(__name__)


class ProviderKind(str, Enum):
    """Role a provider plays in a chain"""
    TOKENIZER = "tokenizer"
    TRANSLITERATOR = "transliterator"


class OperatingMode(str, Enum):
    """What a pipeline invocation should produce"""
    TOKENIZE = "tokenize"            # tokenizer stage only
    TRANSLITERATE = "transliterate"  # tokenizer + transliterator stages


class ProviderOptions(BaseModel):
    """Base for provider option models; unknown keys belong to other stages."""
    model_config = ConfigDict(extra="ignore")


class Provider(ABC):
    """
    Abstract base class for pipeline stages.

    Subclasses set the class attributes and implement _load, _unload and run.
    """

    name: str = ""
    kind: ProviderKind
    capabilities: FrozenSet[str] = frozenset()
    supported_modes: FrozenSet[OperatingMode] = frozenset()
    # 0 means no limit on the length of one input chunk
    max_input_length: int = 0
    options_model: Type[ProviderOptions] = ProviderOptions

    def __init__(self):
        self.options = self.options_model()
        self.progress_callback: Optional[ProgressCallback] = None
        self._initialized = False

    def __repr__(self) -> str:
        state = "initialized" if self._initialized else "idle"
        return f"<{self.__class__.__name__} name={self.name} {state}>"

    @property
    def initialized(self) -> bool:
        return self._initialized

    def configure(self, options: Dict[str, Any]) -> None:
        """
        Validate options and merge them over the current ones.

        Raises:
            ConfigurationError: if an option has an invalid value
        """
        self.apply_options(self.validate_options(options))

    def validate_options(self, options: Optional[Dict[str, Any]]) -> ProviderOptions:
        """Options merged over the current ones, validated; nothing is changed."""
        merged = {**self.options.model_dump(), **(options or {})}
        try:
            return self.options_model.model_validate(merged)
        except ValidationError as err:
            raise ConfigurationError(f"invalid options for {self.name}: {err}") from err

    def apply_options(self, new_options: ProviderOptions) -> None:
        """Install validated options, dropping a loaded engine if they changed."""
        changed = new_options != self.options
        self.options = new_options
        if changed and self._initialized:
            logger.debug(f"{self.name}: options changed, engine will be reloaded")
            self.release()

    def with_progress_callback(self, callback: Optional[ProgressCallback]) -> "Provider":
        self.progress_callback = callback
        return self

    def initialize(self, ctx: Optional[CancellationContext] = None) -> None:
        """Load the engine if it is not loaded yet."""
        ctx = ctx or CancellationContext.background()
        ctx.check(f"{self.name} initialization")
        if self._initialized:
            return
        self._load(ctx, force_fresh=False)
        self._initialized = True
        logger.info(f"{self.name}: initialized")

    def reinitialize(self, ctx: Optional[CancellationContext] = None, force_fresh: bool = False) -> None:
        """
        Drop the engine and load it again.

        Args:
            force_fresh: Also bypass any on-disk cache the engine keeps
        """
        ctx = ctx or CancellationContext.background()
        ctx.check(f"{self.name} reinitialization")
        self.release()
        self._load(ctx, force_fresh=force_fresh)
        self._initialized = True
        logger.info(f"{self.name}: reinitialized (force_fresh={force_fresh})")

    def release(self, ctx: Optional[CancellationContext] = None) -> None:
        """
        Free the engine. Safe to call more than once.

        A cancelled ctx does not stop the release.
        """
        if not self._initialized:
            return
        self._initialized = False
        self._unload()
        logger.info(f"{self.name}: released")

    def _report(self, processed: int, total: int) -> None:
        if self.progress_callback is not None:
            self.progress_callback(processed, total)

    def _check_mode(self, mode: OperatingMode) -> None:
        if mode not in self.supported_modes:
            raise ConfigurationError(
                f"{self.name} does not support mode {mode.value!r}"
            )

    @abstractmethod
    def _load(self, ctx: CancellationContext, force_fresh: bool) -> None:
        """Create the engine from self.options"""
        pass

    @abstractmethod
    def _unload(self) -> None:
        """Drop the engine"""
        pass

    @abstractmethod
    def run(
        self,
        ctx: CancellationContext,
        mode: OperatingMode,
        items: TokenSequence,
    ) -> TokenSequence:
        """
        Process items and return the resulting sequence.

        Implementations check `ctx` at entry and at least every
        CANCEL_CHECK_INTERVAL items, report progress once per unit of work
        plus once at completion, and leave `items` unchanged when they fail.
        """
        pass
