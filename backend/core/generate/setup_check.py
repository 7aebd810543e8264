import logging
from typing import Optional
from models.requests import SetupReport
from core.errors import LLMError, QuotaExceededError
from core.generate.llm_client import LLMClient

logger = logging.getLogger(__name__)

def check_setup(llm: LLMClient, probe: bool = True) -> SetupReport:
    """
    Diagnoses common API problems before running extraction:
    key presence and format, and (optionally) a one-message connectivity probe.
    """
    api_key = llm.api_key or ""
    key_found = bool(api_key)
    key_format_ok = api_key.startswith("sk-")

    api_test_ok = False
    api_error: Optional[str] = None
    quota_problem = False

    if key_found and key_format_ok and probe:
        try:
            llm.generate([{"role": "user", "content": "Test"}], timeout=30)
            api_test_ok = True
        except LLMError as e:
            api_error = f"{e.kind}: {e}"
            quota_problem = isinstance(e, QuotaExceededError)

    recommendations = []
    if not key_found:
        recommendations.append("Set OPENAI_API_KEY in your environment or .env file, then restart the service.")
    elif not key_format_ok:
        recommendations.append("OPENAI_API_KEY does not look like an OpenAI key (expected an 'sk-' prefix).")
    if quota_problem:
        recommendations.append("Check API billing, or wait a moment if you hit a rate limit.")

    report = SetupReport(
        api_key_found=key_found,
        api_key_format_ok=key_format_ok,
        api_key_length=len(api_key),
        model=llm.config.model,
        api_test_ok=api_test_ok,
        api_error=api_error,
        recommendations=recommendations
    )

    logger.info(
        f"Setup check: key found={report.api_key_found}, key format ok={report.api_key_format_ok}, "
        f"api test ok={report.api_test_ok}"
    )
    if api_error:
        logger.warning(f"Setup check API error: {api_error}")
    return report
