from config.settings import LLMConfig

class FakeLLM:
    """Stands in for LLMClient. Replies are returned in order; exceptions are raised."""

    def __init__(self, replies=None, api_key="sk-test", config=None):
        self.replies = list(replies or [])
        self.api_key = api_key
        self.config = config or LLMConfig()
        self.calls = []

    @property
    def has_api_key(self):
        return bool(self.api_key)

    def generate(self, messages, model=None, response_format=None, timeout=None):
        self.calls.append({
            "messages": messages,
            "model": model,
            "response_format": response_format,
            "timeout": timeout
        })
        reply = self.replies.pop(0) if self.replies else '{"competencies": []}'
        if isinstance(reply, Exception):
            raise reply
        return reply
