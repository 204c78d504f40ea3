"""Text helpers shared by the classifier and the table decoder."""

import re

FULL_WIDTH_PUNCT = str.maketrans({"（": "(", "）": ")", "．": ".", "：": ":"})
MULTI_VALUE_SEP_RE = re.compile(r"[,，、\n\r]+")


def chop_spaces(text: str) -> str:
    """Remove every whitespace character, including the ideographic space."""
    return re.sub(r"\s+", "", text or "")


def fold_parentheses(text: str) -> str:
    """Replace full-width parentheses with their ASCII forms."""
    return (text or "").replace("（", "(").replace("）", ")")


def fold_punctuation(text: str) -> str:
    """Fold full-width parentheses, full stop and colon to ASCII."""
    return (text or "").translate(FULL_WIDTH_PUNCT)


def split_multi_values(text: str) -> list[str]:
    """
    Split a cell holding several aligned entries.

    Entries are separated by ASCII or full-width commas, the ideographic
    comma or line breaks; empty entries are dropped.
    """
    if not text or not text.strip():
        return []
    values = (value.strip() for value in MULTI_VALUE_SEP_RE.split(text))
    return [value for value in values if value]
