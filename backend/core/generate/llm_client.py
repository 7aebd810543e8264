import logging
import httpx
import time
import random
from typing import List, Dict, Any, Optional
from config.settings import settings, LLMConfig
from core.errors import (
    LLMError,
    QuotaExceededError,
    AuthenticationError,
    NetworkError,
    MalformedResponseError,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {429, 500, 502, 503, 504}

class LLMClient:
    """
    Chat-completions client for OpenAI-compatible APIs.
    Supports JSON-schema structured output, retry with backoff and model fallback.
    Every failure surfaces as an LLMError subclass.
    """

    def __init__(self, api_key: Optional[str] = None, config: Optional[LLMConfig] = None):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.config = config or settings.llm
        self.base_url = f"{self.config.base_url.rstrip('/')}/chat/completions"
        self.headers = {
            "Authorization": f"Bearer {self.api_key}" if self.api_key else "",
            "Content-Type": "application/json"
        }
        self.max_retries = self.config.max_retries
        self.base_delay = self.config.retry_base_delay

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def generate(self,
                 messages: List[Dict[str, str]],
                 model: Optional[str] = None,
                 response_format: Optional[Dict[str, Any]] = None,
                 timeout: Optional[float] = None) -> str:
        """
        Calls the API and returns the reply content.
        Falls back to config.fallback_model once if the primary model fails.
        """
        if not self.has_api_key:
            raise AuthenticationError("OPENAI_API_KEY is not set.")

        payload = {
            "model": model or self.config.model,
            "messages": messages,
            "temperature": self.config.temperature,
            "top_p": self.config.top_p
        }
        if response_format:
            payload["response_format"] = response_format

        timeout = timeout or self.config.timeout_seconds
        try:
            return self._sync_response(payload, timeout)
        except AuthenticationError:
            raise
        except LLMError as e:
            fallback = self.config.fallback_model
            if not fallback or fallback == payload["model"]:
                raise
            logger.warning(f"Primary model {payload['model']} failed: {e}. Trying fallback.")
            return self._sync_response({**payload, "model": fallback}, timeout)

    def _sync_response(self, payload: Dict[str, Any], timeout: float) -> str:
        last_error: LLMError = NetworkError("Failed after maximum retries")

        for attempt in range(self.max_retries):
            try:
                with httpx.Client(timeout=timeout) as client:
                    response = client.post(self.base_url, headers=self.headers, json=payload)
            except httpx.TimeoutException as e:
                last_error = NetworkError(f"Request timed out: {e}")
            except httpx.TransportError as e:
                last_error = NetworkError(f"Connection failed: {e}")
            else:
                if response.status_code in RETRYABLE_STATUS:
                    last_error = self._classify(response)
                    if isinstance(last_error, QuotaExceededError) and "insufficient_quota" in response.text:
                        raise last_error
                elif response.status_code >= 400:
                    raise self._classify(response)
                else:
                    return self._parse_content(response)

            if attempt < self.max_retries - 1:
                delay = self.base_delay * (2 ** attempt) + random.uniform(0, 1)
                logger.warning(f"{last_error}. Retrying in {delay:.2f}s... (Attempt {attempt+1}/{self.max_retries})")
                time.sleep(delay)

        raise last_error

    @staticmethod
    def _classify(response: httpx.Response) -> LLMError:
        status = response.status_code
        message = f"HTTP {status}: {response.text[:300]}"
        if status in (401, 403):
            return AuthenticationError(message)
        if status == 429:
            return QuotaExceededError(message)
        if status >= 500:
            return NetworkError(message)
        return LLMError(message)

    @staticmethod
    def _parse_content(response: httpx.Response) -> str:
        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError(f"Unexpected response body: {e}")
        return content or ""
