import logging
from typing import Optional, Sequence
from models.chunk import Chunk
from models.requests import ChunkPreview, PreviewRow, WordCountStats
from config.settings import settings, PreviewConfig
from core.report.tables import chunks_to_frame
from core.text import truncate

logger = logging.getLogger(__name__)

def preview_chunks(chunks: Sequence[Chunk], config: Optional[PreviewConfig] = None) -> ChunkPreview:
    """
    Quick overview of a chunking result: truncated rows, content type counts
    and word count statistics. The chunks themselves are left untouched.
    """
    config = config or settings.preview
    df = chunks_to_frame(chunks)

    rows = [
        PreviewRow(
            chunk_id=c.chunk_id,
            hierarchy_short=truncate(c.hierarchy, config.hierarchy_width),
            word_count=c.word_count,
            content_type=c.content_type.value,
            preview=truncate(c.chunk_text, config.text_width)
        )
        for c in list(chunks)[:config.max_rows]
    ]

    stats = None
    if not df.empty:
        wc = df["word_count"].astype(float)
        stats = WordCountStats(
            min=wc.min(),
            q1=wc.quantile(0.25),
            median=wc.median(),
            mean=wc.mean(),
            q3=wc.quantile(0.75),
            max=wc.max()
        )

    counts = df["content_type"].value_counts().sort_index()
    preview = ChunkPreview(
        rows=rows,
        total_chunks=len(df),
        content_type_counts={str(k): int(v) for k, v in counts.items()},
        word_count_stats=stats
    )

    logger.info(f"Chunk summary: {preview.total_chunks} chunks, content types {preview.content_type_counts}")
    if stats:
        logger.info(
            f"Word count stats: min={stats.min:g}, q1={stats.q1:g}, median={stats.median:g}, "
            f"mean={stats.mean:.1f}, q3={stats.q3:g}, max={stats.max:g}"
        )
    return preview
