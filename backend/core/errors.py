class MalformedInputError(ValueError):
    """Raised when the chunker receives something other than a string."""


class LLMError(Exception):
    """Recoverable failure of an LLM call. Callers treat it as zero results for the chunk."""

    kind = "LLM Error"
    hint = ""


class QuotaExceededError(LLMError):
    kind = "API Quota/Rate Limit Error"
    hint = "Check your API billing and usage limits."


class AuthenticationError(LLMError):
    kind = "API Key Error"
    hint = "Verify OPENAI_API_KEY in your environment or .env file."


class NetworkError(LLMError):
    kind = "Network Error"
    hint = "Check your internet connection."


class MalformedResponseError(LLMError):
    kind = "Malformed Response"
    hint = "The model reply did not match the requested JSON schema."
