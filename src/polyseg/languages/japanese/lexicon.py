"""
日文詞典 (Lexicon) 模組

字典分詞器使用的唯讀詞頻表。提供兩種實作：

- InMemoryLexicon: 啟動時一次載入（JSON Lines / TSV / LexiconEntry 列表）
- SqliteLexicon: 持久化查詢（每次候選查詢一次），結構對應 japanese_tokens 資料表

排序規則 (rank_key):
    frequency_rank 數值越大越優先（與資料來源的 ORDER BY frequency DESC 一致），
    同分時優先 is_priority，再優先有 surface form（漢字表記）的詞條。

分詞引擎絕不寫入詞典；SqliteLexicon.create() 只是建置資料庫用的工具函式。
"""

import json
import sqlite3
import threading
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from polyseg.core.exceptions import LexiconError
from polyseg.utils.logger import get_logger

logger = get_logger("lexicon")

PathLike = Union[str, Path]


@dataclass(frozen=True)
class LexiconEntry:
    """
    詞條

    Attributes:
        surface_form: 漢字（或其他文字）表記；純假名詞條可為 None
        reading: 讀音（平假名/片假名）
        frequency_rank: 詞頻排名，數值越大越常見
        part_of_speech: 詞性提示
        is_priority: 是否為優先詞彙（原始資料中標記 ★）
    """

    surface_form: Optional[str]
    reading: Optional[str]
    frequency_rank: int = 0
    part_of_speech: str = "unknown"
    is_priority: bool = False

    def __post_init__(self):
        if not self.surface_form and not self.reading:
            raise ValueError("LexiconEntry needs a surface_form or a reading")

    def rank_key(self) -> Tuple[int, bool, bool]:
        """越大越好：(frequency_rank, is_priority, 有表記)"""
        return (self.frequency_rank, self.is_priority, self.surface_form is not None)

    @classmethod
    def from_dict(cls, data: dict) -> "LexiconEntry":
        surface = data.get("surface_form", data.get("kanji"))
        reading = data.get("reading")
        # 表記與讀音相同時只保留表記
        if surface and reading and surface == reading:
            reading = None
        return cls(
            surface_form=surface or None,
            reading=reading or None,
            frequency_rank=int(data.get("frequency_rank", data.get("frequency", 0)) or 0),
            part_of_speech=data.get("part_of_speech") or data.get("pos") or "unknown",
            is_priority=bool(data.get("is_priority", False)),
        )


def _better(current: Optional[LexiconEntry], candidate: LexiconEntry) -> LexiconEntry:
    if current is None or candidate.rank_key() > current.rank_key():
        return candidate
    return current


class InMemoryLexicon:
    """
    記憶體詞典

    建立時依表記與讀音各建一個索引，每個 key 只保留排名最佳的詞條。
    查詢時先比對表記，再比對讀音。
    """

    def __init__(self, entries: Iterable[LexiconEntry] = ()):
        self._by_surface: Dict[str, LexiconEntry] = {}
        self._by_reading: Dict[str, LexiconEntry] = {}
        self._size = 0
        for entry in entries:
            self._size += 1
            if entry.surface_form:
                self._by_surface[entry.surface_form] = _better(self._by_surface.get(entry.surface_form), entry)
            if entry.reading:
                self._by_reading[entry.reading] = _better(self._by_reading.get(entry.reading), entry)
        self._max_length = max(
            (len(key) for key in list(self._by_surface) + list(self._by_reading)),
            default=0,
        )

    def lookup(self, candidate: str) -> Optional[LexiconEntry]:
        if not candidate or len(candidate) > self._max_length:
            return None
        entry = self._by_surface.get(candidate)
        if entry is not None:
            return entry
        return self._by_reading.get(candidate)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, candidate: str) -> bool:
        return self.lookup(candidate) is not None

    @classmethod
    def from_jsonl(cls, path: PathLike) -> "InMemoryLexicon":
        """每行一個 JSON 物件：{"kanji"|"surface_form", "reading", "frequency", "part_of_speech", "is_priority"}"""
        entries = []
        with open(path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entries.append(LexiconEntry.from_dict(json.loads(line)))
                except (ValueError, TypeError) as exc:
                    logger.warning(f"{path}:{line_no} 略過無效詞條: {exc}")
        logger.info(f"Loaded {len(entries)} lexicon entries from {path}")
        return cls(entries)

    @classmethod
    def from_tsv(cls, path: PathLike) -> "InMemoryLexicon":
        """欄位：表記 <TAB> 讀音 <TAB> 詞頻 [<TAB> 詞性]；表記或讀音可留空"""
        entries = []
        with open(path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, 1):
                line = line.rstrip("\n")
                if not line or line.startswith("#"):
                    continue
                cols = line.split("\t")
                if len(cols) < 3:
                    logger.warning(f"{path}:{line_no} 欄位不足，略過")
                    continue
                try:
                    entries.append(
                        LexiconEntry.from_dict(
                            {
                                "surface_form": cols[0],
                                "reading": cols[1],
                                "frequency": cols[2],
                                "part_of_speech": cols[3] if len(cols) > 3 else None,
                            }
                        )
                    )
                except ValueError as exc:
                    logger.warning(f"{path}:{line_no} 略過無效詞條: {exc}")
        logger.info(f"Loaded {len(entries)} lexicon entries from {path}")
        return cls(entries)


_SCHEMA = """
CREATE TABLE IF NOT EXISTS japanese_tokens (
    id INTEGER PRIMARY KEY,
    kanji TEXT,
    reading TEXT,
    frequency INTEGER NOT NULL DEFAULT 0,
    part_of_speech TEXT NOT NULL DEFAULT 'unknown',
    is_priority INTEGER NOT NULL DEFAULT 0
);
CREATE INDEX IF NOT EXISTS kanji_idx ON japanese_tokens (kanji);
CREATE INDEX IF NOT EXISTS reading_idx ON japanese_tokens (reading);
"""

_ORDER = "ORDER BY frequency DESC, is_priority DESC, (kanji IS NULL) ASC LIMIT 1"
_SELECT = "SELECT kanji, reading, frequency, part_of_speech, is_priority FROM japanese_tokens"


class SqliteLexicon:
    """
    SQLite 持久化詞典（唯讀）

    - 以 URI mode=ro 開啟，引擎不會寫入
    - 每個執行緒各自持有連線；close() 關閉所有執行緒開過的連線
    - 查詢結果以 LRU 快取（相同候選在對話中反覆出現）
    - 儲存層錯誤（含無法開啟連線）轉成 LexiconError，由分詞器降級為 no-match
    """

    def __init__(self, path: PathLike, probe_cache_size: int = 20000):
        self.path = Path(path).resolve()
        if not self.path.exists():
            raise LexiconError(f"lexicon database not found: {self.path}")
        self._local = threading.local()
        self._lock = threading.Lock()
        self._connections: List[sqlite3.Connection] = []
        self._generation = 0
        self._cached_lookup = lru_cache(maxsize=probe_cache_size)(self._query)

    def _connection(self) -> sqlite3.Connection:
        conn = getattr(self._local, "conn", None)
        if conn is not None and self._local.generation == self._generation:
            return conn
        try:
            # 連線只在開啟它的執行緒使用；check_same_thread=False 讓 close() 可以跨執行緒關閉
            conn = sqlite3.connect(f"{self.path.as_uri()}?mode=ro", uri=True, check_same_thread=False)
        except (sqlite3.Error, ValueError) as exc:
            raise LexiconError(f"cannot open lexicon {self.path}: {exc}") from exc
        with self._lock:
            self._connections.append(conn)
            self._local.generation = self._generation
        self._local.conn = conn
        return conn

    def _query(self, candidate: str) -> Optional[LexiconEntry]:
        try:
            conn = self._connection()
            row = conn.execute(f"{_SELECT} WHERE kanji = ? {_ORDER}", (candidate,)).fetchone()
            if row is None:
                row = conn.execute(f"{_SELECT} WHERE reading = ? {_ORDER}", (candidate,)).fetchone()
        except sqlite3.Error as exc:
            raise LexiconError(f"lexicon query failed for {candidate!r}: {exc}") from exc

        if row is None:
            return None
        kanji, reading, frequency, pos, is_priority = row
        return LexiconEntry(
            surface_form=kanji or None,
            reading=reading or None,
            frequency_rank=int(frequency or 0),
            part_of_speech=pos or "unknown",
            is_priority=bool(is_priority),
        )

    def lookup(self, candidate: str) -> Optional[LexiconEntry]:
        if not candidate:
            return None
        return self._cached_lookup(candidate)

    def cache_info(self):
        return self._cached_lookup.cache_info()

    def close(self) -> None:
        """關閉所有執行緒的連線；之後的查詢會重新開啟連線"""
        with self._lock:
            connections, self._connections = self._connections, []
            self._generation += 1
        for conn in connections:
            conn.close()
        self._local.conn = None
        self._cached_lookup.cache_clear()

    @property
    def open_connections(self) -> int:
        with self._lock:
            return len(self._connections)

    @classmethod
    def create(cls, path: PathLike, entries: Iterable[LexiconEntry]) -> "SqliteLexicon":
        """建置詞典資料庫（離線工具用），回傳唯讀的 SqliteLexicon"""
        path = Path(path)
        conn = sqlite3.connect(str(path))
        try:
            conn.executescript(_SCHEMA)
            conn.executemany(
                "INSERT INTO japanese_tokens (kanji, reading, frequency, part_of_speech, is_priority) "
                "VALUES (?, ?, ?, ?, ?)",
                [
                    (e.surface_form, e.reading, e.frequency_rank, e.part_of_speech, int(e.is_priority))
                    for e in entries
                ],
            )
            conn.commit()
        finally:
            conn.close()
        return cls(path)


def load_lexicon(path: PathLike) -> Union[InMemoryLexicon, SqliteLexicon]:
    """依副檔名載入詞典：.jsonl/.json -> 記憶體，.tsv/.txt -> 記憶體，.db/.sqlite -> SQLite"""
    suffix = Path(path).suffix.lower()
    if suffix in (".jsonl", ".json"):
        return InMemoryLexicon.from_jsonl(path)
    if suffix in (".tsv", ".txt"):
        return InMemoryLexicon.from_tsv(path)
    if suffix in (".db", ".sqlite", ".sqlite3"):
        return SqliteLexicon(path)
    raise ValueError(f"unsupported lexicon format: {path}")
