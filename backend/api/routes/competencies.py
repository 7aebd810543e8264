import logging
from fastapi import APIRouter, Depends, Request, HTTPException

from core.pipeline.extraction import ExtractionPipeline
from core.validate.grounding import GroundingValidator
from core.errors import AuthenticationError, LLMError
from models.requests import ExtractRequest, ExtractionResult, ValidateRequest, ValidateResponse

router = APIRouter()
logger = logging.getLogger(__name__)

def get_validator(request: Request) -> GroundingValidator:
    return request.app.state.validator

def get_extraction_pipeline(request: Request) -> ExtractionPipeline:
    return request.app.state.extraction_pipeline

@router.post("/competencies/validate", response_model=ValidateResponse, summary="Score extracted competencies against their source chunks")
def validate_competencies(
    request_data: ValidateRequest,
    validator: GroundingValidator = Depends(get_validator)
):
    validated = validator.validate(request_data.competencies, request_data.chunks)
    return ValidateResponse(competencies=validated, summary=validator.summarize(validated))

@router.post("/competencies/extract", response_model=ExtractionResult, summary="Chunk a document and extract grounded competencies")
def extract_competencies(
    request_data: ExtractRequest,
    pipeline: ExtractionPipeline = Depends(get_extraction_pipeline)
):
    """
    Synchronous def: LLM calls are sequential and rate limited.
    Per-chunk LLM failures are reported in failed_chunks, not as errors.
    """
    try:
        return pipeline.run(
            request_data.markdown_text,
            max_words=request_data.max_words,
            min_words=request_data.min_words,
            max_per_chunk=request_data.max_per_chunk,
            model=request_data.model
        )
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except LLMError as e:
        raise HTTPException(status_code=502, detail=f"{e.kind}: {e}")
    except Exception:
        logger.exception("Competency extraction failed.")
        raise HTTPException(status_code=500, detail="Internal processing error during extraction.")
