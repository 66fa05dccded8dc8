"""
文字系統分類模組 (Script Classifier)

以固定的 Unicode 區塊表，把單一字元分類成粗略的文字系統類別。
純函式、O(1)（區塊表大小固定）、永不拋例外，未知碼位一律歸為 OTHER。
"""

import bisect
import unicodedata
from enum import Enum
from typing import List, Tuple


class ScriptClass(Enum):
    """字元的粗略文字系統類別"""

    LOGOGRAPHIC = "logographic"  # 漢字 (CJK Unified Ideographs 及擴充區)
    HIRAGANA = "hiragana"
    KATAKANA = "katakana"
    HANGUL = "hangul"
    RTL = "rtl"  # 阿拉伯文、希伯來文
    BRAHMIC = "brahmic"  # 天城文、泰文等
    LATIN = "latin"  # 拉丁字母（含希臘、西里爾等以空白分詞的字母系統）
    OTHER = "other"  # 空白、標點、數字、符號與未知碼位

    @property
    def is_kana(self) -> bool:
        return self in (ScriptClass.HIRAGANA, ScriptClass.KATAKANA)

    @property
    def is_japanese(self) -> bool:
        """漢字與假名：日文分詞時視為同一段"""
        return self in (ScriptClass.LOGOGRAPHIC, ScriptClass.HIRAGANA, ScriptClass.KATAKANA)

    @property
    def is_spaced(self) -> bool:
        """以空白分隔單字的文字系統"""
        return self in (ScriptClass.LATIN, ScriptClass.HANGUL, ScriptClass.RTL, ScriptClass.BRAHMIC)


# =============================================================================
# 區塊表 (start, end, class)，end 為閉區間；必須依 start 排序且互不重疊
# =============================================================================
_BLOCKS: List[Tuple[int, int, ScriptClass]] = sorted(
    [
        # 拉丁字母
        (0x0041, 0x005A, ScriptClass.LATIN),
        (0x0061, 0x007A, ScriptClass.LATIN),
        (0x00C0, 0x00D6, ScriptClass.LATIN),
        (0x00D8, 0x00F6, ScriptClass.LATIN),
        (0x00F8, 0x024F, ScriptClass.LATIN),
        (0x0250, 0x02AF, ScriptClass.LATIN),  # IPA Extensions
        (0x0370, 0x03FF, ScriptClass.LATIN),  # Greek
        (0x0400, 0x052F, ScriptClass.LATIN),  # Cyrillic
        (0x1E00, 0x1EFF, ScriptClass.LATIN),
        (0xFF21, 0xFF3A, ScriptClass.LATIN),  # 全形 A-Z
        (0xFF41, 0xFF5A, ScriptClass.LATIN),  # 全形 a-z
        # 右至左
        (0x0590, 0x05FF, ScriptClass.RTL),
        (0x0600, 0x06FF, ScriptClass.RTL),
        (0x0750, 0x077F, ScriptClass.RTL),
        (0x08A0, 0x08FF, ScriptClass.RTL),
        (0xFB1D, 0xFDFF, ScriptClass.RTL),
        (0xFE70, 0xFEFF, ScriptClass.RTL),
        # 婆羅米系
        (0x0900, 0x0DFF, ScriptClass.BRAHMIC),
        (0x0E00, 0x0EFF, ScriptClass.BRAHMIC),  # Thai, Lao
        (0x1000, 0x109F, ScriptClass.BRAHMIC),  # Myanmar
        (0x1780, 0x17FF, ScriptClass.BRAHMIC),  # Khmer
        # 諺文
        (0x1100, 0x11FF, ScriptClass.HANGUL),
        (0x3130, 0x318F, ScriptClass.HANGUL),
        (0xA960, 0xA97F, ScriptClass.HANGUL),
        (0xAC00, 0xD7AF, ScriptClass.HANGUL),
        # 々 〆 〇
        (0x3005, 0x3007, ScriptClass.LOGOGRAPHIC),
        # 假名
        (0x3041, 0x309F, ScriptClass.HIRAGANA),
        (0x30A0, 0x30FA, ScriptClass.KATAKANA),
        # 0x30FB (・) 是標點
        (0x30FC, 0x30FF, ScriptClass.KATAKANA),
        (0x31F0, 0x31FF, ScriptClass.KATAKANA),
        (0xFF66, 0xFF9F, ScriptClass.KATAKANA),  # 半形片假名
        # 漢字
        (0x3400, 0x4DBF, ScriptClass.LOGOGRAPHIC),
        (0x4E00, 0x9FFF, ScriptClass.LOGOGRAPHIC),
        (0xF900, 0xFAFF, ScriptClass.LOGOGRAPHIC),
        (0x20000, 0x2A6DF, ScriptClass.LOGOGRAPHIC),
        (0x2A700, 0x2EBEF, ScriptClass.LOGOGRAPHIC),
        (0x30000, 0x3134F, ScriptClass.LOGOGRAPHIC),
    ],
    key=lambda block: block[0],
)
_BLOCK_STARTS = [block[0] for block in _BLOCKS]

# 日文/中文常見標點（字典分詞器第一步使用的固定集合）
CJK_PUNCTUATION = frozenset(
    "。、，．！？：；“”‘’\"'（）【】「」『』〈〉《》〔〕［］｛｝…‥—―〜～・･｡､｢｣"
)


def classify(char: str) -> ScriptClass:
    """
    將單一字元分類為 ScriptClass

    Args:
        char: 單一字元；空字串或多字元字串只看第一個字元，空字串歸為 OTHER

    Returns:
        ScriptClass
    """
    if not char:
        return ScriptClass.OTHER

    code = ord(char[0])

    # ASCII 快速路徑
    if code < 0x80:
        if 0x41 <= code <= 0x5A or 0x61 <= code <= 0x7A:
            return ScriptClass.LATIN
        return ScriptClass.OTHER

    index = bisect.bisect_right(_BLOCK_STARTS, code) - 1
    if index >= 0:
        start, end, script = _BLOCKS[index]
        if start <= code <= end:
            return script
    return ScriptClass.OTHER


def is_punctuation(char: str) -> bool:
    """Unicode 一般類別為標點 (P*) 或符號 (S*) 的字元"""
    if not char:
        return False
    if char in CJK_PUNCTUATION:
        return True
    return unicodedata.category(char[0])[0] in ("P", "S")


def is_word_char(char: str) -> bool:
    """字母、數字或附加符號（組合字元不可從單字尾端剝除，例如天城文的 virama）"""
    if not char:
        return False
    return unicodedata.category(char[0])[0] in ("L", "N", "M")


def contains_logographic(text: str) -> bool:
    """文字中是否包含漢字"""
    return any(classify(ch) is ScriptClass.LOGOGRAPHIC for ch in text or "")


def contains_kana(text: str) -> bool:
    """文字中是否包含平假名或片假名"""
    return any(classify(ch).is_kana for ch in text or "")
