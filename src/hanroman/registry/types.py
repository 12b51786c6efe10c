"""
Registry entry types.

ProviderEntry holds a factory rather than a provider instance: every
pipeline built from the registry gets its own providers, so engine handles
are never shared between pipelines.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from src.hanroman.providers.base import Provider, ProviderKind


@dataclass(frozen=True)
class ProviderEntry:
    """A named provider implementation registered for one language."""
    name: str
    kind: ProviderKind
    factory: Callable[[], Provider]
    capabilities: FrozenSet[str] = field(default_factory=frozenset)
    description: str = ""

    @classmethod
    def for_provider(cls, provider_cls: Type[Provider], description: str = "") -> "ProviderEntry":
        """Entry built from a Provider subclass's class attributes."""
        return cls(
            name=provider_cls.name,
            kind=provider_cls.kind,
            factory=provider_cls,
            capabilities=frozenset(provider_cls.capabilities),
            description=description or (provider_cls.__doc__ or "").strip().split("\n")[0],
        )

    def create(self) -> Provider:
        return self.factory()

    def has_capability(self, capability: str) -> bool:
        return capability in self.capabilities


class Scheme(BaseModel):
    """
    Named configuration preset of a language.

    Selecting a scheme builds a pipeline from `providers` (tokenizer, then
    transliterator) and configures the transliterator with `style`.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Scheme name, matched case-insensitively",
        examples=["tone", "tone3", "firstletter"]
    )

    description: str = Field(
        default="",
        description="Human readable description",
    )

    providers: Tuple[str, ...] = Field(
        ...,
        min_length=1,
        max_length=2,
        description="Provider names in chain order: tokenizer, transliterator",
        examples=[("jieba", "pinyin")]
    )

    style: Optional[str] = Field(
        default=None,
        description="Style passed to the transliterator as its `scheme` option; the scheme name if None",
    )

    def options(self) -> Dict[str, Any]:
        """Options for ProviderPipeline.configure()"""
        return {"scheme": self.style or self.name}
