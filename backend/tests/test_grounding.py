import os
import sys
import logging
import pytest

# Add backend to sys.path
sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".."))

from core.validate.grounding import GroundingValidator
from config.settings import ValidationConfig
from models.chunk import Chunk, ContentType
from models.competency import CompetencyRecord

def make_chunk(chunk_id, text):
    return Chunk(
        chunk_id=chunk_id,
        chunk_text=text,
        word_count=len(text.split()),
        content_type=ContentType.main_content,
        parent_chunk_id=int(chunk_id.split(".")[0])
    )

CHUNKS = [
    make_chunk("1.1", "Analysts use Excel and SQL to clean raw records before reporting."),
    make_chunk("2.1", "Data governance defines who may access customer tables."),
]

@pytest.fixture
def validator():
    return GroundingValidator(ValidationConfig())

def test_exact_match(validator):
    records = [CompetencyRecord(term="Excel", source_chunk="1.1")]
    result = validator.validate(records, CHUNKS)[0]

    assert result.text_found is True
    assert result.partial_match is True
    assert result.confidence == 1.0

def test_term_in_short_sentence(validator):
    chunks = [make_chunk("1.1", "Excel is used for calculations.")]
    result = validator.validate([CompetencyRecord(term="Excel", source_chunk="1.1")], chunks)[0]

    assert (result.text_found, result.confidence) == (True, 1.0)

def test_exact_match_is_case_insensitive(validator):
    result = validator.validate([CompetencyRecord(term="DATA GOVERNANCE", source_chunk="2.1")], CHUNKS)[0]

    assert result.text_found is True
    assert result.confidence == 1.0

def test_partial_match(validator):
    # key words: "excel", "modeling"; one of two is enough
    result = validator.validate([CompetencyRecord(term="Excel modeling", source_chunk="1.1")], CHUNKS)[0]

    assert result.text_found is False
    assert result.partial_match is True
    assert result.confidence == 0.7

def test_partial_match_needs_half_of_key_words(validator):
    # key words: "sql", "window", "functions"; ceil(3 / 2) = 2 needed
    result = validator.validate([CompetencyRecord(term="SQL window functions", source_chunk="1.1")], CHUNKS)[0]

    assert result.partial_match is False
    assert result.confidence == 0.2

def test_stop_words_and_short_tokens_are_ignored(validator):
    assert validator.key_words("Data for the Analysis of BI") == ["analysis"]
    assert validator.key_words("a to of") == []

    # Only stop words and short tokens: never a partial match
    result = validator.validate([CompetencyRecord(term="the data of", source_chunk="2.1")], CHUNKS)[0]
    assert result.partial_match is False

def test_definition_found_in_text(validator):
    record = CompetencyRecord(
        term="Stewardship",
        definition="who may access customer tables",
        source_chunk="2.1"
    )
    result = validator.validate([record], CHUNKS)[0]

    assert result.text_found is False
    assert result.partial_match is False
    assert result.confidence == 0.5

def test_empty_definition_is_not_evidence(validator):
    result = validator.validate([CompetencyRecord(term="Stewardship", definition="", source_chunk="2.1")], CHUNKS)[0]

    assert result.confidence == 0.2

def test_fallback_score(validator):
    result = validator.validate([CompetencyRecord(term="Quantum annealing", source_chunk="1.1")], CHUNKS)[0]

    assert (result.text_found, result.partial_match, result.confidence) == (False, False, 0.2)

@pytest.mark.parametrize("source_chunk", ["9.9", None])
def test_unknown_source_chunk(validator, source_chunk):
    result = validator.validate([CompetencyRecord(term="Excel", source_chunk=source_chunk)], CHUNKS)[0]

    assert (result.text_found, result.partial_match, result.confidence) == (False, False, 0.2)

def test_empty_input(validator):
    assert validator.validate([], CHUNKS) == []

def test_records_are_never_dropped_and_keep_extras(validator):
    records = [
        CompetencyRecord(term="Excel", category="tool", importance="high", source_chunk="1.1", plo="PLO-2"),
        CompetencyRecord(term="Unrelated", source_chunk="2.1"),
    ]
    result = validator.validate(records, CHUNKS)

    assert [r.term for r in result] == ["Excel", "Unrelated"]
    assert result[0].category == "tool"
    assert result[0].model_dump()["plo"] == "PLO-2"
    assert "chunk_text" not in result[0].model_dump()

def test_revalidation_overwrites_scores(validator):
    first = validator.validate([CompetencyRecord(term="Excel", source_chunk="1.1")], CHUNKS)
    moved = [first[0].model_copy(update={"source_chunk": "2.1"})]
    again = validator.validate(moved, CHUNKS)[0]

    assert again.text_found is False
    assert again.confidence == 0.2

def test_special_characters_are_literal(validator):
    chunks = [make_chunk("1.1", "We rely on C++ and .NET (mostly) here.")]
    records = [
        CompetencyRecord(term="C++", source_chunk="1.1"),
        CompetencyRecord(term="(mostly)", source_chunk="1.1"),
        CompetencyRecord(term="C.*", source_chunk="1.1"),
    ]
    result = validator.validate(records, chunks)

    assert [r.text_found for r in result] == [True, True, False]

def test_summary(validator):
    records = [
        CompetencyRecord(term="Excel", source_chunk="1.1"),
        CompetencyRecord(term="Excel modeling", source_chunk="1.1"),
        CompetencyRecord(term="Quantum annealing", source_chunk="1.1"),
    ]
    summary = validator.summarize(validator.validate(records, CHUNKS))

    assert summary.total == 3
    assert summary.exact_matches == 1
    assert summary.exact_match_pct == 33.3
    assert summary.partial_matches == 2
    assert summary.partial_match_pct == 66.7
    # 0.7 is not above the high threshold
    assert summary.high_confidence == 1
    assert summary.low_confidence == 1
    assert summary.low_confidence_terms == ["Quantum annealing"]

def test_summary_of_nothing(validator):
    summary = validator.summarize([])

    assert summary.total == 0
    assert summary.exact_match_pct == 0.0
    assert summary.low_confidence_terms == []

def test_low_confidence_terms_are_capped_and_logged(validator, caplog):
    records = [CompetencyRecord(term=f"Missing {i}", source_chunk="1.1") for i in range(8)]

    with caplog.at_level(logging.INFO):
        validated = validator.validate(records, CHUNKS)
        # Scoring alone does not summarise
        assert "Competency validation" not in caplog.text
        summary = validator.summarize(validated)

    assert summary.low_confidence == 8
    assert len(summary.low_confidence_terms) == 5
    assert caplog.text.count("Competency validation: total=8") == 1
    assert "Low confidence terms" in caplog.text
