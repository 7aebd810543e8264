import logging
from fastapi import APIRouter, Depends, Request, HTTPException

from core.chunk.chunker import Chunker
from core.chunk.keyword_filter import KeywordFilter
from core.report.preview import preview_chunks
from core.errors import MalformedInputError
from models.requests import ChunkRequest, ChunkResponse, FilterRequest, ChunkPreview

router = APIRouter()
logger = logging.getLogger(__name__)

def get_chunker(request: Request) -> Chunker:
    return request.app.state.chunker

def get_keyword_filter(request: Request) -> KeywordFilter:
    return request.app.state.keyword_filter

@router.post("/chunks", response_model=ChunkResponse, summary="Split markdown into classified, size-bounded chunks")
def chunk_markdown(
    request_data: ChunkRequest,
    chunker: Chunker = Depends(get_chunker)
):
    try:
        chunks = chunker.chunk_document(
            request_data.markdown_text,
            max_words=request_data.max_words,
            min_words=request_data.min_words
        )
    except MalformedInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ChunkResponse(total_chunks=len(chunks), chunks=chunks)

@router.post("/chunks/filter", response_model=ChunkResponse, summary="Keep chunks suitable for keyword extraction")
def filter_chunks(
    request_data: FilterRequest,
    keyword_filter: KeywordFilter = Depends(get_keyword_filter)
):
    kept = keyword_filter.filter(request_data.chunks)
    return ChunkResponse(total_chunks=len(kept), chunks=kept)

@router.post("/chunks/preview", response_model=ChunkPreview, summary="Summarise a chunking result")
def preview(request_data: FilterRequest):
    return preview_chunks(request_data.chunks)
