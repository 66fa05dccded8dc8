"""
文字系統路由模組

- script_classifier: 單一字元的文字系統分類（無依賴，可被 core 匯入）
- script_runs: 依文字系統切段（依賴 core.token，延遲載入以避免循環匯入）
"""

from __future__ import annotations

import importlib
from typing import Any

from .script_classifier import (
    CJK_PUNCTUATION,
    ScriptClass,
    classify,
    contains_kana,
    contains_logographic,
    is_punctuation,
    is_word_char,
)

_LAZY_IMPORTS = {
    "ScriptRun": (".script_runs", "ScriptRun"),
    "ScriptRuns": (".script_runs", "ScriptRuns"),
    "split_runs": (".script_runs", "split_runs"),
    "merge_runs": (".script_runs", "merge_runs"),
    "runs_to_drafts": (".script_runs", "runs_to_drafts"),
    "split_other_run": (".script_runs", "split_other_run"),
}

__all__ = [
    "ScriptClass",
    "classify",
    "is_punctuation",
    "is_word_char",
    "contains_kana",
    "contains_logographic",
    "CJK_PUNCTUATION",
    "ScriptRun",
    "ScriptRuns",
    "split_runs",
    "merge_runs",
    "runs_to_drafts",
    "split_other_run",
]


def __getattr__(name: str) -> Any:
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_path, attr_name = _LAZY_IMPORTS[name]
    module = importlib.import_module(module_path, __name__)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
