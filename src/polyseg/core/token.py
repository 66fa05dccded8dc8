"""
Token 資料結構

- Token: 分詞結果的最小單位，offset 對應原始輸入字串（半開區間 [start, end)）
- TokenDraft: 分詞策略輸出的草稿，可以沒有 offset，
  由 UnifiedTokenizer 透過 OffsetReconciler 補上或校正
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional

from polyseg.router.script_classifier import ScriptClass, classify


class ScriptFlag(Enum):
    """提供給 renderer 判斷 token 間是否插入空白"""

    LOGOGRAPHIC = "logographic"
    KANA = "kana"
    OTHER_SCRIPT = "otherScript"


class TokenSource(Enum):
    """Token 來源（除錯、統計用）"""

    DICTIONARY = "dictionary"
    MORPHOLOGICAL_ANALYZER = "morphologicalAnalyzer"
    STATISTICAL_ENGINE = "statisticalEngine"
    SCRIPT_RUN = "scriptRun"
    FALLBACK = "fallback"
    PUNCTUATION = "punctuation"


def script_flags_for(surface: str) -> FrozenSet[ScriptFlag]:
    """
    依 surface 中的字元推導 ScriptFlag

    - 任一字元為漢字 -> LOGOGRAPHIC
    - 任一字元為假名 -> KANA
    - 任一字元為其他文字系統的字母 -> OTHER_SCRIPT
    標點、數字、空白不貢獻任何旗標。
    """
    flags = set()
    for ch in surface:
        script = classify(ch)
        if script is ScriptClass.LOGOGRAPHIC:
            flags.add(ScriptFlag.LOGOGRAPHIC)
        elif script.is_kana:
            flags.add(ScriptFlag.KANA)
        elif script is not ScriptClass.OTHER or ch.isalpha():
            flags.add(ScriptFlag.OTHER_SCRIPT)
    return frozenset(flags)


@dataclass(frozen=True)
class Token:
    """
    分詞結果

    Attributes:
        surface: 原文中出現的確切子字串（不做正規化）
        start: 起始 offset（含）
        end: 結束 offset（不含），保證 0 <= start < end <= len(text)
        language: 分詞時使用的語言代碼（混合文字時可能與呼叫端指定的不同）
        script_flags: 文字系統旗標
        source: Token 來源
        reading: 讀音，只有字典/形態分析器有提供時才填，絕不猜測
        part_of_speech: 詞性提示（來源有提供時）
        frequency_rank: 詞頻排名（僅字典來源）
    """

    surface: str
    start: int
    end: int
    language: str
    source: TokenSource
    script_flags: FrozenSet[ScriptFlag] = field(default_factory=frozenset)
    reading: Optional[str] = None
    part_of_speech: Optional[str] = None
    frequency_rank: Optional[int] = None

    @property
    def is_punctuation(self) -> bool:
        return self.source is TokenSource.PUNCTUATION

    @property
    def is_logographic(self) -> bool:
        return ScriptFlag.LOGOGRAPHIC in self.script_flags


@dataclass
class TokenDraft:
    """
    分詞策略的輸出草稿

    start 為 None 表示策略沒有提供 offset（例如外部引擎只回傳字串列表），
    由 UnifiedTokenizer 在最後一步統一定位。
    """

    surface: str
    source: TokenSource
    start: Optional[int] = None
    language: Optional[str] = None
    reading: Optional[str] = None
    part_of_speech: Optional[str] = None
    frequency_rank: Optional[int] = None

    @property
    def end(self) -> Optional[int]:
        if self.start is None:
            return None
        return self.start + len(self.surface)

    def shifted(self, offset: int) -> "TokenDraft":
        """回傳 offset 平移後的新草稿（子字串視圖 -> 原文座標）"""
        if self.start is None or offset == 0:
            return replace(self)
        return replace(self, start=self.start + offset)

    def to_token(self, start: int, default_language: str) -> Token:
        return Token(
            surface=self.surface,
            start=start,
            end=start + len(self.surface),
            language=self.language or default_language,
            source=self.source,
            script_flags=script_flags_for(self.surface),
            reading=self.reading,
            part_of_speech=self.part_of_speech,
            frequency_rank=self.frequency_rank,
        )
