"""
Shared fixtures built on the oracle fakes in tests/fakes.py.
"""

import pytest

from src.hanroman.providers.jieba_provider import JiebaProvider
from src.hanroman.providers.pinyin_provider import PinyinProvider
from src.hanroman.registry.registry import ProviderRegistry
from src.hanroman.registry.types import ProviderEntry, Scheme

from tests.fakes import FakePhoneticOracle, FakeSegmenter, ProgressRecorder


@pytest.fixture
def fake_segmenter():
    return FakeSegmenter()


@pytest.fixture
def fake_oracle():
    return FakePhoneticOracle()


@pytest.fixture
def progress():
    return ProgressRecorder()


@pytest.fixture
def fake_registry(fake_segmenter, fake_oracle):
    """Frozen registry whose providers share the test's fake oracles."""
    registry = ProviderRegistry()
    registry.register("zho", ProviderEntry(
        name=JiebaProvider.name,
        kind=JiebaProvider.kind,
        factory=lambda: JiebaProvider(segmenter=fake_segmenter),
        capabilities=JiebaProvider.capabilities,
    ))
    registry.register("zho", ProviderEntry(
        name=PinyinProvider.name,
        kind=PinyinProvider.kind,
        factory=lambda: PinyinProvider(oracle=fake_oracle),
        capabilities=PinyinProvider.capabilities,
    ))
    registry.set_default_chain("zho", ["jieba", "pinyin"])
    for name in ("tone", "tone3", "normal"):
        registry.register_scheme("zho", Scheme(name=name, providers=("jieba", "pinyin")))
    registry.set_default_scheme("zho", "tone")
    return registry.freeze()


@pytest.fixture
def pipeline(fake_registry):
    p = fake_registry.default_pipeline("zho")
    yield p
    p.close()
