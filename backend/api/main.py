import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.chunk.chunker import Chunker
from core.chunk.keyword_filter import KeywordFilter
from core.validate.grounding import GroundingValidator
from core.generate.llm_client import LLMClient
from core.generate.extractor import CompetencyExtractor
from core.pipeline.extraction import ExtractionPipeline

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup: Initialize singletons ---
    logger.info("Initializing chunking and extraction components...")

    llm_client = LLMClient()
    extractor = CompetencyExtractor(llm_client)

    app.state.chunker = Chunker()
    app.state.keyword_filter = KeywordFilter()
    app.state.validator = GroundingValidator()
    app.state.llm_client = llm_client
    app.state.extraction_pipeline = ExtractionPipeline(extractor)

    if not llm_client.has_api_key:
        logger.warning("OPENAI_API_KEY is not set. Competency extraction will fail.")

    logger.info("Initialization complete. All systems ready.")

    yield

    logger.info("Shutting down...")

# Create FastAPI instance
app = FastAPI(
    title="Markdown Competency Chunker API",
    description="Heading-aware markdown chunking, competency extraction and grounding validation",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Health Check Endpoint
@app.get("/health", tags=["System"])
def health_check():
    return {"status": "ok"}

from api.routes import chunks, competencies, setup

app.include_router(chunks.router, prefix="/api", tags=["Chunking"])
app.include_router(competencies.router, prefix="/api", tags=["Competencies"])
app.include_router(setup.router, prefix="/api", tags=["System"])

@app.get("/", tags=["System"])
def root():
    return {"message": "Markdown Competency Chunker API is running."}
