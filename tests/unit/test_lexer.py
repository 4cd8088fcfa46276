import pytest
from toy16_asm.lexer import match_alnum, match_tag, skip_whitespace, line_col, newline_offsets

@pytest.mark.parametrize("src, pos, expected", [
    ("r1 r2;", 0, ("r1", 2)),
    ("r1 r2;", 3, ("r2", 5)),
    ("$4;", 0, None),
    ("$4;", 1, ("4", 2)),
    ("abc9Z;", 0, ("abc9Z", 5)),
    ("", 0, None),
    ("r_1", 0, ("r", 1)),
])
def test_match_alnum(src, pos, expected):
    assert match_alnum(src, pos) == expected

def test_match_tag():
    assert match_tag("add r1;", 3, " ") == 4
    assert match_tag("add;", 3, " ") is None
    assert match_tag(";", 0, ";") == 1

def test_skip_whitespace():
    assert skip_whitespace("  \n\tadd", 0) == 4
    assert skip_whitespace("add", 0) == 0
    assert skip_whitespace("", 0) == 0

@pytest.mark.parametrize("src, pos, expected", [
    ("add r1;", 0, (1, 1)),
    ("add r1;", 4, (1, 5)),
    ("add r1;\nld r2;", 8, (2, 1)),
    ("a\nb\n  c", 6, (3, 3)),
])
def test_line_col(src, pos, expected):
    assert line_col(src, pos) == expected

def test_newline_offsets():
    assert newline_offsets("add r1;\nld r2;\n") == [7, 14]
    assert newline_offsets("add r1;") == []

@pytest.mark.parametrize("pos", [0, 3, 7, 8, 12, 15, 16])
def test_line_col_with_precomputed_offsets(pos):
    src = "add r1;\nld r2;\n\nx"
    assert line_col(src, pos, newline_offsets(src)) == line_col(src, pos)
