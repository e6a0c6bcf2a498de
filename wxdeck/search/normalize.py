"""
Card name normalization.

Localized card names use dot and bullet characters inconsistently and mix
full-width and half-width Latin letters. Query words and names are both
normalized before substring comparison.
"""

import re

_DOTS = re.compile("[\u00b7\u0387\u05bc\u2022\u2027\u2219\u22c5\u30fb\uff0e\uff65\u2051:*\u2020]")

_FULL_WIDTH = (
    "０１２３４５６７８９＝＠＃"
    "ＡＢＣＤＥＦＧＨＩＪＫＬＭＮＯＰＱＲＳＴＵＶＷＸＹＺ"
    "ａｂｃｄｅｆｇｈｉｊｋｌｍｎｏｐｑｒｓｔｕｖｗｘｙｚ"
)
_HALF_WIDTH = (
    "0123456789=@#"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
)
_WIDTH_TABLE = str.maketrans(_FULL_WIDTH, _HALF_WIDTH)


def normalize_name(text: str) -> str:
    """Strip dot characters, fold full-width characters, and lower-case."""
    return _DOTS.sub("", text).translate(_WIDTH_TABLE).lower()
