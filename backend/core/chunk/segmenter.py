from typing import List, Optional
from models.chunk import Line, Section
from core.text import count_words

class ChunkSegmenter:
    """
    Groups tagged lines into contiguous sections.
    A section starts at the first line and at every level 2 or 3 heading.
    Level 1 headings stay inside the current section.
    """

    BOUNDARY_LEVELS = (2, 3)

    def segment(self, lines: List[Line]) -> List[Section]:
        sections = []
        for chunk_id, group in enumerate(self._group_lines(lines), start=1):
            sections.append(self._build_section(chunk_id, group))
        return sections

    def _group_lines(self, lines: List[Line]) -> List[List[Line]]:
        groups = []
        current_group = []

        for line in lines:
            starts_chunk = line.is_heading and line.heading_level in self.BOUNDARY_LEVELS
            if starts_chunk and current_group:
                groups.append(current_group)
                current_group = []
            current_group.append(line)

        if current_group:
            groups.append(current_group)
        return groups

    def _build_section(self, chunk_id: int, group: List[Line]) -> Section:
        chunk_text = "\n".join(line.text for line in group)
        first_heading = next((line for line in group if line.is_heading), None)

        heading = first_heading.heading_text if first_heading else None
        level = first_heading.heading_level if first_heading else None
        parent_h1 = self._first_defined(line.h1 for line in group)
        parent_h2 = self._first_defined(line.h2 for line in group)

        return Section(
            chunk_id=chunk_id,
            chunk_text=chunk_text,
            word_count=count_words(chunk_text),
            heading=heading,
            level=level,
            parent_h1=parent_h1,
            parent_h2=parent_h2,
            hierarchy=self.build_hierarchy(heading, level, parent_h1, parent_h2),
            start_line=group[0].line_number,
            end_line=group[-1].line_number
        )

    @staticmethod
    def build_hierarchy(heading: Optional[str],
                        level: Optional[int],
                        parent_h1: Optional[str],
                        parent_h2: Optional[str]) -> Optional[str]:
        """
        "H1" for level 1 or headingless sections, "H1 > H2" for level 2,
        "H1 > H2 > H3" for level 3. Undefined ancestors are left out of the path.
        """
        if heading is not None and level == 2:
            parts = [parent_h1, heading]
        elif heading is not None and level == 3:
            parts = [parent_h1, parent_h2, heading]
        else:
            parts = [parent_h1]

        path = [p for p in parts if p is not None]
        return " > ".join(path) if path else None

    @staticmethod
    def _first_defined(values) -> Optional[str]:
        return next((v for v in values if v is not None), None)
