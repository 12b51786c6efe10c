#!/usr/bin/env python3
"""
Chinese Romanization Pipeline

Runs the stage providers over one input:
1. Chunking - raw text split to the stages' maximum input length
2. Tokenization (jieba) - words + filler tokens, POS tags
3. Transliteration (pypinyin) - chosen reading, heteronyms, tone

One CancellationContext and one progress callback are threaded through
every stage. A failing stage aborts the whole call: the error leaves the
pipeline tagged with the stage name and the failed operation, and no
partial token sequence is returned.

Usage:
    from src.hanroman.zho import build_default_registry

    registry = build_default_registry()
    with registry.default_pipeline("zho") as pipeline:
        print(pipeline.roman("你好吗，世界？"))   # nǐ hǎo ma， shì jiè？
"""

from typing import Any, Dict, FrozenSet, List, Optional, Union
from logging import getLogger

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.hanroman.chunking.chunkifier import Chunkifier
from src.hanroman.context import CancellationContext, ProgressCallback, ProgressReporter
from src.hanroman.errors import OPERATION_ERRORS, ConfigurationError, TranslitError
from src.hanroman.providers.base import OperatingMode, Provider, ProviderKind
from src.hanroman.tokens.types import TokenSequence

logger = getLogger(__name__)


# Mode each stage kind runs in
STAGE_MODES = {
    ProviderKind.TOKENIZER: OperatingMode.TOKENIZE,
    ProviderKind.TRANSLITERATOR: OperatingMode.TRANSLITERATE,
}


class PipelineOptions(BaseModel):
    """
    Pipeline-level options. Every other key is passed to the stages; a key
    named after a stage holds options for that stage only:

        {"scheme": "tone3", "jieba": {"hmm": False}}
    """

    model_config = ConfigDict(extra="allow")

    max_input_length: Optional[int] = Field(
        default=None,
        ge=0,
        description="Upper bound on chunk length, 0 for no bound; stage limits still apply",
    )


class ProviderPipeline:
    """
    Tokenizer stage followed by an optional transliterator stage.

    Instances are built by ProviderRegistry factories; each pipeline owns
    its provider instances and releases them on close().

    Example:
        pipeline = registry.scheme_pipeline("zho", "tone3")
        seq = pipeline.tokens("我们")
        seq[0].numeric_reading   # 'wo3 men5'
    """

    def __init__(
        self,
        language: str,
        tokenizer: Provider,
        transliterator: Optional[Provider] = None,
        chunkifier: Optional[Chunkifier] = None,
    ):
        """
        Args:
            language: ISO 639-3 code of the text this pipeline handles
            tokenizer: Stage producing tokens from raw chunks
            transliterator: Stage romanizing tokens (optional)
            chunkifier: Custom chunkifier; built from max_input_length() if None
        """
        if tokenizer.kind != ProviderKind.TOKENIZER:
            raise ConfigurationError(f"{tokenizer.name} is not a tokenizer")
        if transliterator is not None and transliterator.kind != ProviderKind.TRANSLITERATOR:
            raise ConfigurationError(f"{transliterator.name} is not a transliterator")

        self.language = language
        self.tokenizer = tokenizer
        self.transliterator = transliterator
        self.options = PipelineOptions()
        self.progress_callback: Optional[ProgressCallback] = None
        self._custom_chunkifier = chunkifier

    def __repr__(self) -> str:
        return f"<ProviderPipeline {self.language} {self.name}>"

    @property
    def name(self) -> str:
        return "->".join(stage.name for stage in self.stages)

    @property
    def stages(self) -> List[Provider]:
        if self.transliterator is None:
            return [self.tokenizer]
        return [self.tokenizer, self.transliterator]

    def supported_modes(self) -> FrozenSet[OperatingMode]:
        if self.transliterator is None:
            return frozenset({OperatingMode.TOKENIZE})
        return frozenset({OperatingMode.TOKENIZE, OperatingMode.TRANSLITERATE})

    def max_input_length(self) -> int:
        """Smallest non-zero limit among the stages and the options, 0 if none."""
        limits = [stage.max_input_length for stage in self.stages if stage.max_input_length > 0]
        if self.options.max_input_length:
            limits.append(self.options.max_input_length)
        return min(limits) if limits else 0

    @property
    def chunkifier(self) -> Chunkifier:
        if self._custom_chunkifier is not None:
            return self._custom_chunkifier
        return Chunkifier(self.max_input_length())

    def with_chunkifier(self, chunkifier: Optional[Chunkifier]) -> "ProviderPipeline":
        self._custom_chunkifier = chunkifier
        return self

    def with_progress_callback(self, callback: Optional[ProgressCallback]) -> "ProviderPipeline":
        self.progress_callback = callback
        return self

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def configure(self, options: Optional[Dict[str, Any]] = None) -> None:
        """
        Validate options and hand them to the stages.

        Every stage's options are validated before any is applied, so a
        rejected option leaves the pipeline and all stages unchanged.

        Raises:
            ConfigurationError: invalid pipeline or stage option
        """
        options = dict(options or {})
        try:
            pipeline_options = PipelineOptions.model_validate(options)
        except ValidationError as err:
            raise ConfigurationError(f"invalid pipeline options: {err}") from err

        stage_names = {stage.name for stage in self.stages}
        shared = {
            key: value for key, value in options.items()
            if key not in stage_names and key != "max_input_length"
        }

        validated = []
        for stage in self.stages:
            stage_options = dict(shared)
            own = options.get(stage.name)
            if own is not None:
                if not isinstance(own, dict):
                    raise ConfigurationError(
                        f"options for stage {stage.name} must be a mapping, got {type(own).__name__}"
                    )
                stage_options.update(own)
            try:
                validated.append((stage, stage.validate_options(stage_options)))
            except Exception as err:
                self._raise_wrapped(stage, "configure", err)

        self.options = pipeline_options
        for stage, stage_options in validated:
            stage.apply_options(stage_options)

    def initialize(self, ctx: Optional[CancellationContext] = None) -> None:
        """Initialize every stage that is not initialized yet."""
        ctx = ctx or CancellationContext.background()
        for stage in self.stages:
            try:
                stage.initialize(ctx)
            except Exception as err:
                self._raise_wrapped(stage, "initialize", err)
        logger.info(f"Pipeline ready: {self.name}")

    def reinitialize(self, ctx: Optional[CancellationContext] = None, force_fresh: bool = False) -> None:
        """Reload every stage's engine, bypassing caches if force_fresh."""
        ctx = ctx or CancellationContext.background()
        for stage in self.stages:
            try:
                stage.reinitialize(ctx, force_fresh=force_fresh)
            except Exception as err:
                self._raise_wrapped(stage, "initialize", err)
        logger.info(f"Pipeline reinitialized: {self.name} (force_fresh={force_fresh})")

    def close(self, ctx: Optional[CancellationContext] = None) -> None:
        """
        Release every stage. All stages are released even if one fails;
        the first failure is raised afterwards.
        """
        failures = []
        for stage in self.stages:
            try:
                stage.release(ctx)
            except Exception as err:
                logger.error(f"Failed to release {stage.name}: {err}")
                failures.append((stage, err))
        if failures:
            stage, err = failures[0]
            self._raise_wrapped(stage, "release", err)
        logger.info(f"Pipeline closed: {self.name}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def process(
        self,
        ctx: Optional[CancellationContext],
        mode: OperatingMode,
        items: Union[str, TokenSequence],
    ) -> TokenSequence:
        """
        Run the stages that `mode` needs over `items`.

        Args:
            ctx: Cancellation context (never-cancelled context if None)
            mode: TOKENIZE runs the tokenizer only, TRANSLITERATE both stages
            items: Raw text, or a TokenSequence with raw chunks and/or tokens

        Returns:
            New TokenSequence; lexical tokens carry their romanization in
            TRANSLITERATE mode

        Raises:
            CancellationError: ctx was cancelled (before any oracle call if
                it already was on entry)
            ConfigurationError: mode needs a stage this pipeline lacks
            TranslitError: any stage failure, tagged with stage and operation
        """
        ctx = ctx or CancellationContext.background()
        ctx.check("pipeline processing")

        mode = OperatingMode(mode)
        if mode not in self.supported_modes():
            raise ConfigurationError(
                f"pipeline {self.name} cannot run mode {mode.value!r}: no transliterator stage"
            )

        work = self._prepare(items)
        stages = self.stages if mode == OperatingMode.TRANSLITERATE else [self.tokenizer]
        reporter = ProgressReporter(self.progress_callback)

        for stage in stages:
            stage.with_progress_callback(reporter.stage_callback())
            try:
                try:
                    stage.initialize(ctx)
                except Exception as err:
                    self._raise_wrapped(stage, "initialize", err)
                try:
                    work = stage.run(ctx, STAGE_MODES[stage.kind], work)
                except Exception as err:
                    self._raise_wrapped(stage, "process", err)
            finally:
                stage.with_progress_callback(None)
            reporter.finish_stage()

        logger.debug(f"{self.name}: {mode.value} produced {len(work)} tokens")
        return work

    def _prepare(self, items: Union[str, TokenSequence]) -> TokenSequence:
        """Working copy of the input with raw text split into chunks."""
        if isinstance(items, str):
            items = TokenSequence(raw=[items])
        chunkifier = self.chunkifier
        chunks = []
        for text in items.raw:
            chunks.extend(chunkifier.chunkify(text))
        return TokenSequence(items.tokens, raw=chunks)

    def _wrap(self, stage: Provider, operation: str, err: Exception) -> TranslitError:
        if isinstance(err, TranslitError):
            return err.with_stage(stage.name, operation)
        error_cls = OPERATION_ERRORS.get(operation, TranslitError)
        return error_cls(f"{type(err).__name__}: {err}", stage=stage.name, operation=operation)

    def _raise_wrapped(self, stage: Provider, operation: str, err: Exception) -> None:
        wrapped = self._wrap(stage, operation, err)
        if wrapped is err:
            raise err
        raise wrapped from err

    # ------------------------------------------------------------------
    # Convenience
    # ------------------------------------------------------------------

    def _full_mode(self) -> OperatingMode:
        if self.transliterator is None:
            return OperatingMode.TOKENIZE
        return OperatingMode.TRANSLITERATE

    def _require_transliterator(self) -> None:
        if self.transliterator is None:
            raise ConfigurationError(f"romanization requires a transliterator stage (pipeline {self.name})")

    def tokens(self, text: str, ctx: Optional[CancellationContext] = None) -> TokenSequence:
        """All tokens of text, romanized when the pipeline has a transliterator."""
        return self.process(ctx, self._full_mode(), text)

    def lexical_tokens(self, text: str, ctx: Optional[CancellationContext] = None) -> TokenSequence:
        return self.tokens(text, ctx).lexical()

    def roman(self, text: str, ctx: Optional[CancellationContext] = None) -> str:
        self._require_transliterator()
        return self.tokens(text, ctx).roman()

    def roman_parts(self, text: str, ctx: Optional[CancellationContext] = None) -> List[str]:
        """Romanization of each word, punctuation and whitespace left out."""
        self._require_transliterator()
        return self.lexical_tokens(text, ctx).roman_parts()

    def tokenized(self, text: str, ctx: Optional[CancellationContext] = None) -> str:
        return self.process(ctx, OperatingMode.TOKENIZE, text).tokenized()

    def tokenized_parts(self, text: str, ctx: Optional[CancellationContext] = None) -> List[str]:
        return self.process(ctx, OperatingMode.TOKENIZE, text).lexical().tokenized_parts()
