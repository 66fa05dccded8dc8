"""
語言支援模組

- generic: 不依賴外部引擎的預設分詞器
- japanese: 字典最長匹配 + fugashi
- chinese: jieba 統計分詞
"""
