from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional
from models.competency import CompetencyCategory, Importance

SYSTEM_PROMPT = """You extract competency terms from documents.
Rules: extract only terms that appear in or are directly supported by the text,
do not invent new terms, return JSON only."""

COMPETENCY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "competencies": {
            "type": "array",
            "description": "Array of extracted competencies",
            "items": {
                "type": "object",
                "properties": {
                    "term": {"type": "string", "description": "Competency term or phrase"},
                    "category": {
                        "type": "string",
                        "description": "Type of competency",
                        "enum": [c.value for c in CompetencyCategory]
                    },
                    "importance": {
                        "type": "string",
                        "description": "Importance level",
                        "enum": [i.value for i in Importance]
                    },
                    "definition": {"type": "string", "description": "Brief explanation of competency"}
                },
                "required": ["term", "category", "importance", "definition"],
                "additionalProperties": False
            }
        }
    },
    "required": ["competencies"],
    "additionalProperties": False
}

PromptFunction = Callable[[int, Optional[str], str], str]

class PromptStrategy(ABC):
    """
    Decides what the LLM is asked for each chunk and the JSON shape it must return.
    The schema must be an object with a "competencies" array of term objects.
    """

    schema_name: str = "competency_extraction"

    @abstractmethod
    def build_prompt(self, n_competencies: int, hierarchy: Optional[str], text: str) -> str:
        pass

    @property
    @abstractmethod
    def schema(self) -> Dict[str, Any]:
        pass

    def response_format(self) -> Dict[str, Any]:
        return {
            "type": "json_schema",
            "json_schema": {"name": self.schema_name, "schema": self.schema, "strict": True}
        }

    def build_messages(self, n_competencies: int, hierarchy: Optional[str], text: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": self.build_prompt(n_competencies, hierarchy, text)}
        ]


class DataLiteracyPromptStrategy(PromptStrategy):
    """Data literacy competencies for graduate teachers running data-driven classrooms."""

    def build_prompt(self, n_competencies: int, hierarchy: Optional[str], text: str) -> str:
        return (
            f"Extract the top {n_competencies} data literacy COMPETENCIES for GRADUATE TEACHERS "
            "to implement DATA-DRIVEN CLASSROOM practices from this text.\n\n"
            "IMPORTANT: Only extract competencies that are explicitly mentioned or directly implied "
            "in the given text. Do not create new terms that are not present in the source material.\n\n"
            "Focus on competencies that enable teachers to:\n"
            "- Use data to improve student learning outcomes\n"
            "- Make evidence-based instructional decisions\n"
            "- Assess and analyze student performance data\n"
            "- Create data-informed learning environments\n\n"
            "Categories:\n"
            "- knowledge: concepts and theories teachers need to understand about data use in education\n"
            "- skill: practical abilities to perform data-related tasks in the classroom\n"
            "- behavior: mindsets and approaches for data-driven teaching\n"
            "- tool: technologies and instruments for data collection and analysis\n"
            "- practice: methods and procedures followed in data-driven instruction\n"
            "- role: responsibilities teachers have in data-driven educational settings\n\n"
            "Importance levels for classroom implementation: high, medium, low\n\n"
            'Return JSON: {"competencies": [{"term": "...", "category": "skill", '
            '"importance": "high", "definition": "..."}]}\n\n'
            f"Section: {hierarchy or '(No section)'}\n\n"
            f"Text:\n{text}"
        )

    @property
    def schema(self) -> Dict[str, Any]:
        return COMPETENCY_SCHEMA


class CallablePromptStrategy(PromptStrategy):
    """
    Wraps a caller-supplied prompt function (n_competencies, hierarchy, text) -> str
    and, optionally, a custom JSON schema.
    """

    def __init__(self,
                 prompt_fn: PromptFunction,
                 schema: Optional[Dict[str, Any]] = None,
                 schema_name: Optional[str] = None):
        if not callable(prompt_fn):
            raise TypeError(
                "custom prompt must be a function taking (n_competencies, hierarchy, text) "
                f"and returning a string, got {type(prompt_fn).__name__}. "
                "Wrap a fixed prompt string in a function that appends the hierarchy and text."
            )
        self.prompt_fn = prompt_fn
        self._schema = schema or COMPETENCY_SCHEMA
        if schema_name:
            self.schema_name = schema_name

    def build_prompt(self, n_competencies: int, hierarchy: Optional[str], text: str) -> str:
        return str(self.prompt_fn(n_competencies, hierarchy, text))

    @property
    def schema(self) -> Dict[str, Any]:
        return self._schema
