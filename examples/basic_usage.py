"""
基本分詞範例

本檔案展示 polyseg 的主要用法：
1. 模組層級 tokenize()（使用共用的預設引擎）
2. 日文字典分詞 + 顯示用的重新組字
3. 事件回呼：觀察策略挑選與降級
4. 非同步分詞與時限

執行前建議安裝完整依賴：
    pip install "polyseg[all]"
"""

import asyncio

from polyseg import TokenizeOptions, TokenizerEngine, TokenizeTimeoutError, tokenize, tokenize_async
from polyseg.languages.japanese import InMemoryLexicon, LexiconEntry
from polyseg.utils.render import interactive_tokens, join_for_display
from polyseg.utils.token_stats import get_token_stats


# =============================================================================
# 範例 1: 模組層級 API
# =============================================================================
def example_1_module_api():
    print("=" * 60)
    print("範例 1: 模組層級 tokenize()")
    print("=" * 60)

    test_cases = [
        ("Hello, world! How are you?", "en"),
        ("我爱北京天安门", "zh"),
        ("I love 猫と犬。", "ja"),
        ("สวัสดีครับ", "th"),
    ]

    for text, language in test_cases:
        tokens = tokenize(text, language)
        print(f"[{language}] {text}")
        print(f"  -> {[t.surface for t in tokens]}")
    print()


# =============================================================================
# 範例 2: 自帶詞典的日文分詞
# =============================================================================
def example_2_japanese_lexicon():
    """
    詞典命中的 token 會帶有讀音與詞頻；
    詞典沒有收錄的詞交給 fugashi 形態分析器
    """
    print("=" * 60)
    print("範例 2: 日文字典分詞")
    print("=" * 60)

    lexicon = InMemoryLexicon(
        [
            LexiconEntry("日本語", "にほんご", 900, "noun"),
            LexiconEntry("勉強", "べんきょう", 700, "noun"),
            LexiconEntry("猫", "ねこ", 500, "noun"),
        ]
    )
    engine = TokenizerEngine(lexicon=lexicon)

    text = "毎日日本語を勉強しています。"
    tokens = engine.tokenize(text, "ja")
    for token in tokens:
        reading = f" ({token.reading})" if token.reading else ""
        print(f"  {token.surface}{reading}  [{token.source.value}] {token.start}-{token.end}")

    print(f"顯示: {join_for_display(text, tokens, whitespace_separator=' | ')}")
    print(f"可點擊: {[t.surface for t in interactive_tokens(tokens)]}")
    print(f"統計: {get_token_stats(tokens)}")
    print()


# =============================================================================
# 範例 3: 事件回呼
# =============================================================================
def example_3_events():
    print("=" * 60)
    print("範例 3: 事件回呼")
    print("=" * 60)

    def on_event(event):
        print(f"  event: {event['type']} strategy={event.get('strategy')} {event.get('failure_kind', '')}")

    engine = TokenizerEngine(on_event=on_event)
    engine.tokenize("東京タワーはどこですか", "ja")
    engine.tokenize("東京タワーはどこですか", "ja")  # 第二次命中快取

    # 韓文沒有專屬策略，提示改用日文策略
    engine.tokenize("猫と犬", "ko", TokenizeOptions(preferred_script_hints=("ja",)))
    print(f"backend: {engine.get_backend_stats()}")
    print()


# =============================================================================
# 範例 4: 非同步分詞
# =============================================================================
async def example_4_async():
    print("=" * 60)
    print("範例 4: 非同步分詞")
    print("=" * 60)

    texts = ["我爱北京天安门", "天安门上太阳升", "北京欢迎你"]
    results = await asyncio.gather(*(tokenize_async(text, "zh") for text in texts))
    for text, tokens in zip(texts, results):
        print(f"  {text} -> {[t.surface for t in tokens]}")

    try:
        await tokenize_async("很長的文章" * 1000, "zh", timeout=0.001)
    except TokenizeTimeoutError as exc:
        print(f"  timeout: {exc}")
    print()


if __name__ == "__main__":
    example_1_module_api()
    example_2_japanese_lexicon()
    example_3_events()
    asyncio.run(example_4_async())

    print("=" * 60)
    print("✅ 所有範例執行完成!")
    print("=" * 60)
