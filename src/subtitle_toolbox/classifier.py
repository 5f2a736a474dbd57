"""Heuristic Chinese / Japanese line classification.

This is a fast character-set check for bilingual subtitle pairs, not a
language identification model. Short or mixed-script lines can be
misclassified; the extractor's fallback rules compensate for the common
two-line ZH/JA layout.
"""

from __future__ import annotations

import re
from enum import Enum


class Language(str, Enum):
    ZH = "ZH"
    JA = "JA"
    UNKNOWN = "UNKNOWN"


# 平假名、片假名 (U+3040-U+30FF) + 半角片假名 (U+FF66-U+FF9D)
KANA_PATTERN = re.compile(r"[\u3040-\u30FF\uFF66-\uFF9D]")

JA_PUNCT_PATTERN = re.compile(r"[、。「」『』・〜ー]")

# 常见日语语尾、助词
JA_ENDING_PATTERN = re.compile(
    r"(です|ます|だ|だった|ない|たい|よう|から|まで|って|では|じゃ|か|ね|よ)"
)

CN_PUNCT_PATTERN = re.compile(r"[，。！？：；、“”‘’（）《》【】]")

CN_FUNCTION_CHARS = "的了在是我你他她它们这那着啊吧吗呢和与将会一个没有不是还有已经可以因为所以如果但是就是"

# 一小部分常见简体专属字（用于在无假名时区分 ZH/JA，例如 乐/楽）
SIMPLIFIED_ONLY_CHARS = (
    "乐么们这那国齐礼专业为云亿仅从众优会传伤伞伟伪余伙价体佣儿册军农冲决净兰兴养兽内"
    "写击冻划则别删刘华协单卖卢卫厂厅历厉压县参双发变叠叶号后吗问间难"
)

CN_FUNCTION_PATTERN = re.compile(f"[{CN_FUNCTION_CHARS}]")
SIMPLIFIED_ONLY_PATTERN = re.compile(f"[{SIMPLIFIED_ONLY_CHARS}]")


def has_kana(text: str) -> bool:
    return KANA_PATTERN.search(text) is not None


def classify_line(text: str) -> Language:
    """
    Classify one subtitle line as Chinese, Japanese or unknown.

    Japanese signals are checked first, so a line with any kana is JA even
    if it also contains Chinese function characters.

    Args:
        text: A single line of subtitle text

    Returns:
        Language label
    """
    if not text:
        return Language.UNKNOWN
    t = text.strip()
    if not t:
        return Language.UNKNOWN

    # 明确日文特征
    if has_kana(t) or JA_PUNCT_PATTERN.search(t) or JA_ENDING_PATTERN.search(t):
        return Language.JA

    # 明确中文特征
    if CN_PUNCT_PATTERN.search(t) or CN_FUNCTION_PATTERN.search(t) or SIMPLIFIED_ONLY_PATTERN.search(t):
        return Language.ZH

    return Language.UNKNOWN
