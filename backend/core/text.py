import re
from typing import List

WORD_PATTERN = re.compile(r"\w+")
PARAGRAPH_BREAK = re.compile(r"\n\n+")


def count_words(text: str) -> int:
    return len(WORD_PATTERN.findall(text))


def split_paragraphs(text: str) -> List[str]:
    """Splits on runs of blank lines. Paragraph text is kept as-is, empty ones included."""
    return PARAGRAPH_BREAK.split(text)


def truncate(text: str | None, width: int) -> str | None:
    if text is None or len(text) <= width:
        return text
    return text[:max(width - 3, 0)] + "..."
