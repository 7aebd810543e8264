import logging
from fastapi import APIRouter, Depends, Request

from core.generate.llm_client import LLMClient
from core.generate.setup_check import check_setup
from models.requests import SetupReport

router = APIRouter()
logger = logging.getLogger(__name__)

def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm_client

@router.get("/setup", response_model=SetupReport, summary="Diagnose API key and connectivity")
def setup_check(probe: bool = True, llm_client: LLMClient = Depends(get_llm_client)):
    return check_setup(llm_client, probe=probe)
