"""
文字系統分段模組 (Script-Run Splitter)

將文本切成「同一文字系統的最大連續片段」(script run)。

用途:
- 日文分詞前的預處理：把漢字/假名片段隔離出來交給字典分詞器
- 中文統計引擎失效時的字元級降級
- 最後的緊急分詞器（一個 run 一個 token）
"""

from typing import AbstractSet, Iterator, List, NamedTuple

from polyseg.core.token import TokenDraft, TokenSource

from .script_classifier import ScriptClass, classify, is_punctuation


class ScriptRun(NamedTuple):
    start: int
    end: int
    script: ScriptClass
    text: str


class ScriptRuns:
    """
    惰性、有限、可重新迭代的 script run 序列

    每次 iter() 都從頭重新掃描，相鄰 run 首尾相接、完整覆蓋輸入。
    """

    def __init__(self, text: str):
        self.text = text or ""

    def __iter__(self) -> Iterator[ScriptRun]:
        text = self.text
        if not text:
            return

        run_start = 0
        current = classify(text[0])
        for i in range(1, len(text)):
            script = classify(text[i])
            if script is not current:
                yield ScriptRun(run_start, i, current, text[run_start:i])
                run_start = i
                current = script
        yield ScriptRun(run_start, len(text), current, text[run_start:])

    def __repr__(self) -> str:
        return f"ScriptRuns({self.text!r})"


def split_runs(text: str) -> ScriptRuns:
    """
    將輸入切成 script run

    >>> [(r.text, r.script.value) for r in split_runs("I love 猫と犬。")]
    [('I', 'latin'), (' ', 'other'), ('love', 'latin'), (' ', 'other'), ('猫', 'logographic'), ('と', 'hiragana'), ('犬', 'logographic'), ('。', 'other')]
    """
    return ScriptRuns(text)


def merge_runs(runs: List[ScriptRun], scripts: AbstractSet[ScriptClass], merged_as: ScriptClass) -> List[ScriptRun]:
    """把相鄰且都屬於 scripts 的 run 合併成一段（例如漢字 + 假名 -> 一個日文片段）"""
    merged: List[ScriptRun] = []
    for run in runs:
        if merged and run.script in scripts and merged[-1].script is merged_as and merged[-1].end == run.start:
            prev = merged.pop()
            merged.append(ScriptRun(prev.start, run.end, merged_as, prev.text + run.text))
        elif run.script in scripts:
            merged.append(ScriptRun(run.start, run.end, merged_as, run.text))
        else:
            merged.append(run)
    return merged


def split_other_run(run: ScriptRun) -> List[TokenDraft]:
    """
    處理 OTHER run（空白、標點、數字）

    - 空白不產生 token
    - 連續標點 -> 一個 punctuation token
    - 其餘連續字元（數字等） -> 一個 scriptRun token
    """
    drafts: List[TokenDraft] = []
    text = run.text
    i = 0
    while i < len(text):
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        punct = is_punctuation(ch)
        j = i + 1
        while j < len(text) and not text[j].isspace() and is_punctuation(text[j]) == punct:
            j += 1
        drafts.append(
            TokenDraft(
                surface=text[i:j],
                source=TokenSource.PUNCTUATION if punct else TokenSource.SCRIPT_RUN,
                start=run.start + i,
            )
        )
        i = j
    return drafts


def runs_to_drafts(
    text: str,
    character_scripts: AbstractSet[ScriptClass] = frozenset(),
    source: TokenSource = TokenSource.SCRIPT_RUN,
) -> List[TokenDraft]:
    """
    緊急分詞：一個 run 一個 token

    Args:
        text: 輸入文本
        character_scripts: 屬於這些文字系統的 run 改為「一個字元一個 token」
            （例如中文統計引擎不可用時的漢字 run）
        source: 非標點 token 的來源標記

    Returns:
        List[TokenDraft]: 帶有 offset 的草稿
    """
    drafts: List[TokenDraft] = []
    for run in split_runs(text):
        if run.script is ScriptClass.OTHER:
            for draft in split_other_run(run):
                if draft.source is TokenSource.SCRIPT_RUN:
                    draft.source = source
                drafts.append(draft)
        elif run.script in character_scripts:
            for offset, ch in enumerate(run.text):
                drafts.append(TokenDraft(surface=ch, source=source, start=run.start + offset))
        else:
            drafts.append(TokenDraft(surface=run.text, source=source, start=run.start))
    return drafts
