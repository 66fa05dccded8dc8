"""
例外定義

這些例外只在引擎內部流動：策略邊界會把它們轉成 SegmentResult 的 failure，
UnifiedTokenizer 永遠不會把例外拋給呼叫端。
"""


class PolysegError(Exception):
    """polyseg 所有例外的基類"""


class StrategyUnavailableError(PolysegError, ImportError):
    """
    外部引擎/函式庫無法初始化（未安裝、模型載入失敗等）

    Attributes:
        resource: 失敗的資源名稱 (例如 "fugashi", "jieba")
        install_hint: 安裝提示
    """

    def __init__(self, resource: str, message: str = "", install_hint: str = ""):
        self.resource = resource
        self.install_hint = install_hint
        text = message or f"{resource} 無法使用"
        if install_hint:
            text = f"{text}\n\n{install_hint}"
        super().__init__(text)


class LexiconError(PolysegError):
    """詞典儲存層查詢失敗（例如 SQLite 檔案損毀或被鎖定）"""


class TokenizeTimeoutError(PolysegError, TimeoutError):
    """tokenize_async 超過呼叫端指定的時限"""
