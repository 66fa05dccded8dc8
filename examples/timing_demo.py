"""
計時與日誌範例

展示如何使用 verbose=True 與 on_timing 回呼，
監控延遲資源初始化與分詞的效能。
"""

from polyseg import SegmenterConfig, TokenizerEngine, enable_timing_logging


def demo_timing_with_verbose():
    """使用 verbose=True 啟用計時"""
    print("=" * 60)
    print("範例 1: 使用 verbose=True 啟用計時")
    print("=" * 60)

    engine = TokenizerEngine(verbose=True)

    # 第一次呼叫會觸發 fugashi 初始化
    tokens = engine.tokenize("私は学生です", "ja")
    print(f"\n結果: {[t.surface for t in tokens]}")
    print()


def demo_timing_with_callback():
    """使用 on_timing 回呼收集計時資訊"""
    print("=" * 60)
    print("範例 2: 使用 on_timing 回呼收集計時資訊")
    print("=" * 60)

    timing_data = []

    def collect_timing(operation: str, elapsed: float):
        timing_data.append({"operation": operation, "elapsed": elapsed})

    engine = TokenizerEngine(config=SegmenterConfig(on_timing=collect_timing, enable_cache=False))
    texts = [
        "我爱北京天安门",
        "今天天气很好",
        "我们去公园散步吧",
    ]
    for text in texts:
        engine.tokenize(text, "zh")

    print("\n收集到的計時資訊:")
    for item in timing_data:
        print(f"  {item['operation']}: {item['elapsed']:.4f}s")

    tokenize_times = [item["elapsed"] for item in timing_data if item["operation"] == "TokenizerEngine.tokenize"]
    if tokenize_times:
        print(f"\n分詞操作統計:")
        print(f"  平均耗時: {sum(tokenize_times) / len(tokenize_times):.4f}s")
        print(f"  最小耗時: {min(tokenize_times):.4f}s")
        print(f"  最大耗時: {max(tokenize_times):.4f}s")
    print()


def demo_warm_up():
    """預先初始化重量級資源"""
    print("=" * 60)
    print("範例 3: warm_up() 預先載入")
    print("=" * 60)

    engine = TokenizerEngine()
    for name, seconds in engine.warm_up().items():
        status = "無法使用" if seconds is None else f"{seconds:.3f}s"
        print(f"  {name}: {status}")
    print()


def demo_manual_logging():
    """手動控制日誌等級"""
    print("=" * 60)
    print("範例 4: 手動控制日誌等級 (使用標準 logging)")
    print("=" * 60)

    # 方法 1: 使用便利函數
    enable_timing_logging()

    # 方法 2: 直接設定標準 logging
    # logging.getLogger("polyseg").setLevel(logging.DEBUG)

    engine = TokenizerEngine()
    engine.tokenize("Hello world", "en")
    print()


if __name__ == "__main__":
    demo_timing_with_verbose()
    demo_timing_with_callback()
    demo_warm_up()
    demo_manual_logging()

    print("=" * 60)
    print("✅ 所有範例執行完成!")
    print("=" * 60)
