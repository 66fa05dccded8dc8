"""
分詞結果快取

以 (text, language, options_key) 為 key 快取分詞結果，避免同一則訊息重複分詞
（例如聊天訊息重新渲染）。

- 容量固定，超過時淘汰最早插入的項目 (FIFO)
- 可選 TTL：過期項目在讀取時惰性清除，視為 miss
- 以 threading.Lock 保護，多執行緒下的競態最多退化為 cache miss
- 快取的是 Token tuple（Token 為 frozen dataclass），回傳給呼叫端的是新的 list

快取不是正確性元件：停用快取不應改變任何分詞結果。

用法:
    cache = ResultCache(capacity=100)
    tokens = cache.get(key)
    if tokens is None:
        tokens = do_tokenize(...)
        cache.put(key, tokens)
"""

import threading
import time
from collections import OrderedDict
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

from polyseg.core.token import Token

CacheKey = Tuple[str, str, Hashable]

DEFAULT_CAPACITY = 100


class ResultCache:
    """
    有界、執行緒安全的 FIFO 快取

    Args:
        capacity: 最大項目數（>= 1）
        ttl: 存活秒數，None 表示不過期
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, ttl: Optional[float] = None):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        if ttl is not None and ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        self.capacity = capacity
        self.ttl = ttl
        self._entries: "OrderedDict[CacheKey, Tuple[float, Tuple[Token, ...]]]" = OrderedDict()
        self._lock = threading.Lock()
        self._stats: Dict[str, int] = {"hits": 0, "misses": 0, "evictions": 0, "expired": 0}

    @staticmethod
    def make_key(text: str, language: str, options_key: Hashable = None) -> CacheKey:
        return (text, language, options_key)

    def get(self, key: CacheKey) -> Optional[List[Token]]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats["misses"] += 1
                return None

            inserted_at, tokens = entry
            if self.ttl is not None and time.monotonic() - inserted_at > self.ttl:
                del self._entries[key]
                self._stats["expired"] += 1
                self._stats["misses"] += 1
                return None

            self._stats["hits"] += 1
        return list(tokens)

    def put(self, key: CacheKey, tokens: Sequence[Token]) -> None:
        frozen = tuple(tokens)
        with self._lock:
            if key in self._entries:
                # 覆寫時視為新插入
                del self._entries[key]
            self._entries[key] = (time.monotonic(), frozen)
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)
                self._stats["evictions"] += 1

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if self.ttl is not None and time.monotonic() - entry[0] > self.ttl:
                return False
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        """清除所有快取內容（統計保留）"""
        with self._lock:
            self._entries.clear()

    def reset_stats(self) -> None:
        """重置統計（測試隔離用），不清除快取內容"""
        with self._lock:
            for name in self._stats:
                self._stats[name] = 0

    def stats(self) -> Dict[str, Any]:
        """
        取得快取統計

        Returns:
            Dict: hits, misses, evictions, expired, size, capacity, hit_rate
        """
        with self._lock:
            total = self._stats["hits"] + self._stats["misses"]
            return {
                **self._stats,
                "size": len(self._entries),
                "capacity": self.capacity,
                "hit_rate": self._stats["hits"] / total if total > 0 else 0.0,
            }
