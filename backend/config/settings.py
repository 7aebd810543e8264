from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field
import yaml
import os

class ChunkingConfig(BaseModel):
    max_words: int = 800
    min_words: int = 100
    keyword_min_words: int = 50
    table_pipe_threshold: int = 20
    metadata_patterns: list[str] = [
        "related research",
        "related priorities",
        "references",
        "acronym",
        "glossary",
        "evidence",
        "gartner recommended",
    ]
    example_patterns: list[str] = ["example", "case study"]
    keyword_content_types: list[str] = ["main_content", "example"]

class ValidationConfig(BaseModel):
    stop_words: list[str] = ["data", "the", "of", "and", "to", "for", "in", "a", "an"]
    min_key_word_length: int = 3
    exact_score: float = 1.0
    partial_score: float = 0.7
    definition_score: float = 0.5
    fallback_score: float = 0.2
    high_confidence: float = 0.7
    low_confidence: float = 0.5
    max_low_confidence_terms: int = 5

class LLMConfig(BaseModel):
    provider: str = "openai"
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    fallback_model: str = ""
    temperature: float = 0.1
    top_p: float = 0.8
    timeout_seconds: float = 120.0
    max_retries: int = Field(3, ge=1)  # attempts per model, including the first
    retry_base_delay: float = 2.0

class ExtractionConfig(BaseModel):
    max_per_chunk: int = 15
    min_per_chunk: int = 3
    words_per_competency: int = 50
    request_delay_seconds: float = 1.5

class PreviewConfig(BaseModel):
    max_rows: int = 20
    text_width: int = 80
    hierarchy_width: int = 60

class AppSettings(BaseSettings):
    chunking: ChunkingConfig = ChunkingConfig()
    validation: ValidationConfig = ValidationConfig()
    llm: LLMConfig = LLMConfig()
    extraction: ExtractionConfig = ExtractionConfig()
    preview: PreviewConfig = PreviewConfig()
    openai_api_key: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

def load_settings(config_path: str = "backend/config/config.yaml") -> AppSettings:
    """Loads settings from config.yaml and applies env overrides."""

    # Try multiple paths for convenience during testing vs running
    paths_to_try = [
        config_path,
        "config.yaml",
        "config/config.yaml",
        os.path.join(os.path.dirname(__file__), "config.yaml")
    ]

    yaml_data = {}
    for path in paths_to_try:
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
            break

    # Manually map yaml sections to our sub-models
    return AppSettings(
        chunking=ChunkingConfig(**yaml_data.get("chunking", {})),
        validation=ValidationConfig(**yaml_data.get("validation", {})),
        llm=LLMConfig(**yaml_data.get("llm", {})),
        extraction=ExtractionConfig(**yaml_data.get("extraction", {})),
        preview=PreviewConfig(**yaml_data.get("preview", {}))
    )

# Global settings instance
settings = load_settings()
