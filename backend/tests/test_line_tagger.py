import os
import sys
import pytest

# Add backend to sys.path
sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".."))

from core.parse.line_tagger import LineTagger
from core.errors import MalformedInputError

def test_heading_levels():
    lines = LineTagger().tag("# Part\n## Section\n### Sub\nplain")

    assert [l.heading_level for l in lines] == [1, 2, 3, None]
    assert [l.heading_text for l in lines] == ["Part", "Section", "Sub", None]
    assert [l.is_heading for l in lines] == [True, True, True, False]
    assert [l.line_number for l in lines] == [1, 2, 3, 4]

def test_four_hashes_is_not_a_heading():
    line = LineTagger().tag("#### Not a heading")[0]

    assert line.is_heading is False
    assert line.heading_level is None
    assert line.heading_text is None

def test_heading_requires_space_and_non_hash():
    lines = LineTagger().tag("#NoSpace\n# \n##  spaced")

    assert lines[0].is_heading is False
    # "# " followed by nothing is not a heading
    assert lines[1].is_heading is False
    # Only the "## " prefix is removed, no further trimming
    assert lines[2].heading_level == 2
    assert lines[2].heading_text == " spaced"

def test_separator_detection():
    lines = LineTagger().tag("---\n-----\n--\n--- \ntext")

    assert [l.is_separator for l in lines] == [True, True, False, False, False]

def test_forward_fill_keeps_other_levels():
    text = "intro\n# P1\n## S1\n### T1\n# P2\nbody"
    lines = LineTagger().tag(text)

    assert (lines[0].h1, lines[0].h2, lines[0].h3) == (None, None, None)
    assert (lines[3].h1, lines[3].h2, lines[3].h3) == ("P1", "S1", "T1")
    # A new level 1 heading does not clear h2/h3
    assert (lines[4].h1, lines[4].h2, lines[4].h3) == ("P2", "S1", "T1")
    assert (lines[5].h1, lines[5].h2, lines[5].h3) == ("P2", "S1", "T1")

def test_splits_on_newline_only():
    lines = LineTagger().tag("a\r\nb")

    assert [l.text for l in lines] == ["a\r", "b"]

def test_empty_text_is_one_line():
    lines = LineTagger().tag("")

    assert len(lines) == 1
    assert lines[0].text == ""

@pytest.mark.parametrize("bad_input", [None, 42, b"# bytes", ["# A"]])
def test_rejects_non_string_input(bad_input):
    with pytest.raises(MalformedInputError):
        LineTagger().tag(bad_input)
