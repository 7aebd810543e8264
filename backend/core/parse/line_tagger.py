import re
from typing import List, Optional, Tuple
from models.chunk import Line
from core.errors import MalformedInputError

# Exactly k '#' characters, a space, then a non-'#' character
HEADING_PATTERNS = {
    1: re.compile(r"^# [^#]"),
    2: re.compile(r"^## [^#]"),
    3: re.compile(r"^### [^#]"),
}
SEPARATOR_PATTERN = re.compile(r"^---+$")

class LineTagger:
    """
    Splits markdown text into Line records.
    - Detects level 1-3 headings and page separators.
    - Forward-fills the most recent heading of each level (h1/h2/h3).
    """

    def tag(self, markdown_text: str) -> List[Line]:
        if not isinstance(markdown_text, str):
            raise MalformedInputError(
                f"markdown_text must be a string, got {type(markdown_text).__name__}"
            )

        lines = []
        # Current ancestor per level. A heading only replaces its own slot.
        ancestors: Tuple[Optional[str], Optional[str], Optional[str]] = (None, None, None)

        for line_number, text in enumerate(markdown_text.split("\n"), start=1):
            level = self._heading_level(text)
            heading_text = text[level + 1:] if level else None

            if level:
                slots = list(ancestors)
                slots[level - 1] = heading_text
                ancestors = (slots[0], slots[1], slots[2])

            lines.append(Line(
                line_number=line_number,
                text=text,
                is_heading=level is not None,
                heading_level=level,
                heading_text=heading_text,
                is_separator=bool(SEPARATOR_PATTERN.match(text)),
                h1=ancestors[0],
                h2=ancestors[1],
                h3=ancestors[2]
            ))

        return lines

    @staticmethod
    def _heading_level(text: str) -> Optional[int]:
        for level, pattern in HEADING_PATTERNS.items():
            if pattern.match(text):
                return level
        return None
