from pathlib import Path

import pytest

from core.exceptions import PatternSyntaxError
from core.pattern import Literal, RecursiveWildcard, Wildcard, compile_pattern, compile_patterns


def _kinds(pattern):
    return [type(s).__name__ for s in pattern.segments]


def test_segments_are_classified(tmp_path):
    p = compile_pattern("src/**/img_[0-9]?.png", cwd=tmp_path)
    assert _kinds(p) == ["Literal", "RecursiveWildcard", "Wildcard"]
    assert p.segments[0] == Literal("src", "src")
    assert p.segments[2].glob == "img_[0-9]?.png"


def test_consecutive_recursive_segments_collapse(tmp_path):
    p = compile_pattern("**/**/**/x.txt", cwd=tmp_path)
    assert p.segments == (RecursiveWildcard(), Literal("x.txt", "x.txt"))


def test_dot_and_empty_components_are_dropped(tmp_path):
    p = compile_pattern("./a//b/./*.txt", cwd=tmp_path)
    assert [s.glob if isinstance(s, Wildcard) else s.name for s in p.segments] == ["a", "b", "*.txt"]


def test_static_prefix_and_root(tmp_path):
    p = compile_pattern("a/b/*/c.txt", cwd=tmp_path)
    assert p.static_prefix == ("a", "b")
    assert p.root == tmp_path / "a" / "b"


def test_static_prefix_excludes_file_name(tmp_path):
    p = compile_pattern("a/b.txt", cwd=tmp_path)
    assert p.static_prefix == ("a",)
    assert p.root == tmp_path / "a"


def test_bare_wildcard_roots_at_cwd(tmp_path):
    p = compile_pattern("**/*.txt", cwd=tmp_path)
    assert p.static_prefix == ()
    assert p.root == tmp_path


def test_absolute_pattern_is_based_at_anchor(tmp_path):
    p = compile_pattern(str(tmp_path / "*.txt"), cwd=Path("/somewhere/else"))
    assert p.base == Path(tmp_path.anchor)
    assert p.root == tmp_path


def test_dotdot_collapses_in_literal_prefix(tmp_path):
    p = compile_pattern("a/../b/*.txt", cwd=tmp_path)
    assert p.static_prefix == ("b",)


def test_leading_dotdot_resolves_against_cwd(tmp_path):
    p = compile_pattern("../x/*.txt", cwd=tmp_path / "sub")
    anchored = p.anchored()
    assert anchored.base == Path(tmp_path.anchor)
    assert anchored.root == tmp_path / "x"
    assert all(isinstance(s, Literal) for s in anchored.segments[:-1])


def test_anchored_keeps_pattern_identity(tmp_path):
    p = compile_pattern("**/*.txt", index=3, cwd=tmp_path)
    anchored = p.anchored()
    assert anchored.index == 3
    assert anchored.raw == "**/*.txt"
    assert anchored.root == tmp_path
    assert isinstance(anchored.segments[-2], RecursiveWildcard)


def test_ignore_case_folds_literal_keys(tmp_path):
    p = compile_pattern("Docs/*.TXT", case_sensitive=False, cwd=tmp_path)
    assert p.segments[0] == Literal("Docs", "docs")
    assert p.segments[1].regex.fullmatch("readme.txt")


def test_describe_lists_segments(tmp_path):
    p = compile_pattern("a/**/*.txt", cwd=tmp_path)
    assert p.describe() == "literal(a) / recursive(**) / wildcard(*.txt)"


@pytest.mark.parametrize(
    "raw, position, fragment",
    [
        ("a/[z", 2, "unclosed character class"),
        ("[abc", 0, "unclosed character class"),
        ("a**", 1, "'**' must be a whole path component"),
        ("x/**b/y", 2, "'**' must be a whole path component"),
        ("[z-a]", 1, "invalid character range"),
        ("*/../x", 2, "'..' after a wildcard"),
        ("", 0, "empty pattern"),
        ("   ", 0, "empty pattern"),
        ("..", 0, "does not name any file"),
    ],
)
def test_syntax_errors_carry_position(tmp_path, raw, position, fragment):
    with pytest.raises(PatternSyntaxError) as info:
        compile_pattern(raw, cwd=tmp_path)
    assert info.value.position == position
    assert fragment in info.value.message
    assert info.value.pattern == raw
    assert f"at position {position}" in str(info.value)


def test_root_alone_names_no_file(tmp_path):
    with pytest.raises(PatternSyntaxError, match="does not name any file"):
        compile_pattern("/", cwd=tmp_path)


def test_character_class_edge_cases(tmp_path):
    bracket = compile_pattern("[]]", cwd=tmp_path).segments[0]
    assert bracket.regex.fullmatch("]")
    negated = compile_pattern("[!a-c]x", cwd=tmp_path).segments[0]
    assert negated.regex.fullmatch("dx")
    assert not negated.regex.fullmatch("bx")
    caret = compile_pattern("[^a]", cwd=tmp_path).segments[0]
    assert not caret.regex.fullmatch("a")
    dash = compile_pattern("[a-]", cwd=tmp_path).segments[0]
    assert dash.regex.fullmatch("-")


def test_regex_metacharacters_are_literal(tmp_path):
    segment = compile_pattern("a+b(1).*", cwd=tmp_path).segments[0]
    assert segment.regex.fullmatch("a+b(1).txt")
    assert not segment.regex.fullmatch("aab(1).txt")


def test_compile_patterns_collects_errors(tmp_path):
    patterns, rejected = compile_patterns(["a/[z", "*.txt", "b**"], cwd=tmp_path)
    assert [p.index for p in patterns] == [1]
    assert [e.pattern for e in rejected] == ["a/[z", "b**"]
