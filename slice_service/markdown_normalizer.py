"""
Markdown emphasis normalization for multibyte text.

GFM only treats underscore emphasis as valid when the delimiters are
flanked by ASCII punctuation or whitespace, so `__強調__` next to CJK text
renders literally. Asterisk emphasis has no such restriction, so underscore
delimiters touching wide characters are rewritten to asterisks.

Bold runs wrapped in CJK punctuation (`**「テスト」**`) fail the flanking
rules even with asterisks, so those are emitted as <strong> directly.

Usage:
    from slice_service.markdown_normalizer import normalize_multibyte_emphasis

    normalize_multibyte_emphasis("これは__テスト__です")
    # Returns: "これは**テスト**です"
"""

import re

# Anything outside ASCII counts as wide
WIDE_CHAR = r'[^\x00-\x7f]'

# CJK Symbols and Punctuation, Halfwidth and Fullwidth Forms
CJK_PUNCT = r'[\u3000-\u303f\uff00-\uffef]'

_WIDE_RE = re.compile(WIDE_CHAR)

# Order matters - double delimiters first so `__x__` is not read as `_` + `_x_` + `_`
_EMPHASIS_RULES = [
    # Content contains a wide character: __あいう__, __mix世界ed__
    (re.compile(rf'__([^_\n]*{WIDE_CHAR}[^_\n]*)__'), r'**\1**'),
    # Wide character right before: あ__text__
    (re.compile(rf'({WIDE_CHAR})__([^_\n]+)__'), r'\1**\2**'),
    # Wide character right after: __text__あ
    (re.compile(rf'__([^_\n]+)__({WIDE_CHAR})'), r'**\1**\2'),
    (re.compile(rf'_([^_\n]*{WIDE_CHAR}[^_\n]*)_'), r'*\1*'),
    (re.compile(rf'({WIDE_CHAR})_([^_\n]+)_'), r'\1*\2*'),
    (re.compile(rf'_([^_\n]+)_({WIDE_CHAR})'), r'*\1*\2'),
]

_CJK_PUNCT_BOLD_RE = re.compile(rf'\*\*({CJK_PUNCT}[^*\n]*{CJK_PUNCT})\*\*')


def contains_wide_characters(text: str) -> bool:
    """Check whether text contains any non-ASCII character."""
    return bool(text) and _WIDE_RE.search(text) is not None


def convert_cjk_punctuation_bold(text: str) -> str:
    """
    Replace **...** with <strong>...</strong> when the bold content starts
    and ends with CJK punctuation.

    Content must not contain '*' or a newline.
    """
    return _CJK_PUNCT_BOLD_RE.sub(r'<strong>\1</strong>', text)


def normalize_multibyte_emphasis(text: str) -> str:
    """
    Normalize emphasis markers for multibyte text.

    Converts underscore emphasis to asterisk emphasis when the emphasized
    content contains, or sits directly next to, a wide character. ASCII-only
    emphasis is left alone. Delimited content never spans a newline.

    Args:
        text: Markdown source

    Returns:
        Markdown with emphasis delimiters normalized
    """
    if not text:
        return text

    for pattern, replacement in _EMPHASIS_RULES:
        text = pattern.sub(replacement, text)

    return convert_cjk_punctuation_bold(text)
