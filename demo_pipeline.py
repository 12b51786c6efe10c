#!/usr/bin/env python3
"""
Demo: Chinese Romanization Pipeline

Segments a short text with heteronyms (银行/行走, 长大/长度, 重要/重新),
romanizes it with two schemes and shows the alternatives the resolver kept.
"""

import logging

import jieba

from src.hanroman import CancellationContext, OperatingMode, TqdmProgress, build_default_registry


def main():
    """Run pipeline demo with test text."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    jieba.setLogLevel(logging.WARNING)

    text = """我在银行工作，每天行走很长的路。
孩子长大了，这条河的长度是三百公里。
这件事很重要，我们要重新开始！
Hello 123, 你好吗？"""

    print("=" * 80)
    print("CHINESE ROMANIZATION PIPELINE DEMO")
    print("=" * 80)
    print(f"\nInput text:\n{text}\n")
    print("=" * 80)

    registry = build_default_registry()
    print(f"\n📚 Schemes for zho: {', '.join(s.name for s in registry.schemes('zho'))}")

    print("\n🚀 Initializing pipeline...")
    with registry.default_pipeline("zho") as pipeline:
        ctx = CancellationContext(timeout=60)
        pipeline.initialize(ctx)
        print(f"✓ Pipeline ready: {pipeline.name}\n")

        print("🔄 Processing text through pipeline:")
        print("   Stage 1: Tokenization (jieba)")
        print("   Stage 2: Transliteration (pypinyin)\n")

        with TqdmProgress("Romanizing") as progress:
            pipeline.with_progress_callback(progress)
            tokens = pipeline.process(ctx, OperatingMode.TRANSLITERATE, text)
        pipeline.with_progress_callback(None)

        assert tokens.surface() == text, "tokens must reconstruct the input"

        print("=" * 80)
        print("PIPELINE RESULTS")
        print("=" * 80)

        lexical = tokens.lexical()
        print(f"\n📊 Statistics:")
        print(f"   Total tokens: {len(tokens)}")
        print(f"   Lexical tokens: {len(lexical)}")
        print(f"   Filler tokens: {len(tokens) - len(lexical)}")

        print(f"\n📝 Tokenized:\n{tokens.tokenized()}")
        print(f"\n🔤 Romanized:\n{tokens.roman()}")

        print(f"\n{'=' * 80}")
        print("🎯 HETERONYM ANALYSIS (Characters with Several Readings)")
        print(f"{'=' * 80}\n")

        for token in lexical:
            readings = getattr(token, "all_readings_by_character", [])
            alternatives = [
                f"{char}: {'/'.join(candidates)}"
                for char, candidates in zip(token.surface, readings)
                if len(candidates) > 1
            ]
            if not alternatives:
                continue
            print(f"  {token.surface:6} {token.part_of_speech:4} │ {token.romanization:20} │ {'; '.join(alternatives)}")

    print(f"\n{'=' * 80}")
    print("🔢 Numeric tones (scheme tone3)")
    print(f"{'=' * 80}\n")
    with registry.scheme_pipeline("zho", "tone3") as pipeline:
        for token in pipeline.lexical_tokens("我们去北京。"):
            tone = token.tone.value if token.tone else "-"
            print(f"  {token.surface:6} {token.romanization:15} tone={tone}")

    print(f"\n{'=' * 80}")
    print("✨ Pipeline processing complete!")
    print(f"{'=' * 80}\n")


if __name__ == '__main__':
    main()
