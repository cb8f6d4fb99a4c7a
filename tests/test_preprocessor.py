import pytest

from solidsnake.diagnostics import CompileErrors, MixedIndentationError
from solidsnake.preprocessor import PreprocessResult, preprocess_indentation


def clean(text):
    return text.strip("\n")


def test_simple_indent_dedent():
    source = clean(
        """
if x:
    y = 1
    z = 2
"""
    )
    result = preprocess_indentation(source)
    assert "<<INDENT>>" in result.transformed
    assert "<<DEDENT>>" in result.transformed
    expected = clean(
        """
if x:
<<INDENT>>
y = 1
z = 2
<<DEDENT>>
"""
    )
    assert clean(result.transformed) == expected


def test_offset_mapping():
    source = clean(
        """
if x:
    y = 42
"""
    )
    result = preprocess_indentation(source)
    start = result.transformed.find("42")
    end = start + 2
    orig_start, orig_end = result.map_span_back(start, end)
    assert source[orig_start:orig_end] == "42"


def test_mixed_indentation_error():
    with pytest.raises(CompileErrors) as info:
        preprocess_indentation("if x:\n \ty = 1\n")
    assert any(isinstance(e, MixedIndentationError) for e in info.value)


def test_nested_indents():
    source = clean(
        """
if x:
    if y:
        z = 1
"""
    )
    result = preprocess_indentation(source)
    expected = clean(
        """
if x:
<<INDENT>>
if y:
<<INDENT>>
z = 1
<<DEDENT>>
<<DEDENT>>
"""
    )
    assert clean(result.transformed) == expected


def test_simple_indent_and_dedent():
    result = preprocess_indentation("if x:\n  y = 1\nz = 2\n")
    assert "<<INDENT>>" in result.transformed
    assert "<<DEDENT>>" in result.transformed
    assert "y = 1" in result.transformed
    assert "z = 2" in result.transformed


def test_mixed_indentation_error2():
    with pytest.raises(CompileErrors) as info:
        preprocess_indentation("if x:\n\t y = 1\n")
    assert any(isinstance(e, MixedIndentationError) for e in info.value)


def test_mixed_indentation_error_location():
    with pytest.raises(CompileErrors) as info:
        preprocess_indentation("if x:\n\t y = 1\n")
    error = next(iter(info.value))
    assert error.line == 2
    assert error.span.start == 6
    assert error.span.end == 6


def test_nested_blocks():
    result = preprocess_indentation("if x:\n  if y:\n    z = 1\n  w = 2\nu = 3\n")
    assert result.transformed.count("<<INDENT>>") == 2
    assert result.transformed.count("<<DEDENT>>") == 2


def test_dedent_with_trailing_blank_lines():
    result = preprocess_indentation("if x:\n  y = 1\n\n\n")
    assert result.transformed.endswith("<<DEDENT>>\n")


def test_artificial_token_not_mapped():
    result = preprocess_indentation("if x:\n  y = 1\n")
    idx = result.transformed.find("<<INDENT>>")
    assert idx not in result.rev_offset_map


def test_span_mapping_roundtrip():
    result = preprocess_indentation("if x:\n  y = 1\nz = 2\n")
    start = result.transformed.find("y = 1")
    end = start + len("y = 1")
    orig_start, orig_end = result.map_span_back(start, end)
    assert result.original[orig_start:orig_end] == "y = 1"


def test_deep_indentation():
    result = preprocess_indentation("if x:\n  if y:\n    if z:\n      a = 1\n")
    assert result.transformed.count("<<INDENT>>") == 3
    assert result.transformed.count("<<DEDENT>>") == 3


def test_comment_only_lines():
    result = preprocess_indentation("# comment\nif x:\n  # inner comment\n  y = 1\n")
    assert "<<INDENT>>" in result.transformed
    assert "<<DEDENT>>\n#" not in result.transformed


def test_tabs_only_indent():
    result = preprocess_indentation("if x:\n\tprint = 1\n")
    assert "<<INDENT>>\nprint = 1\n" in result.transformed


def test_spaces_only_indent():
    result = preprocess_indentation("if x:\n    print = 1\n")
    assert "<<INDENT>>\nprint = 1\n" in result.transformed


def test_unicode_comment_span_handling():
    result = preprocess_indentation("if x:\n  y = 1   # → should not panic\n")
    assert "y = 1" in result.transformed
    start = result.transformed.find("1")
    orig_start, orig_end = result.map_span_back(start, start + 1)
    assert result.original[orig_start:orig_end] == "1"


def test_unicode_comment_does_not_break_span_mapping():
    result = preprocess_indentation("let a = x * 3   # → should stay as x * 3\n")
    start = result.transformed.find("3")
    orig_start, orig_end = result.map_span_back(start, start + len("3"))
    assert result.original[orig_start:orig_end] == "3"


def test_unicode_comment_span_map_consistency():
    result = preprocess_indentation("let a = x * 3   # → stay 🚀 ثابت \n")
    transformed = result.transformed
    span_start = transformed.find("3")
    span_end = span_start + len("3")
    orig_start, orig_end = result.map_span_back(span_start, span_end)
    assert result.original[orig_start:orig_end] == "3"

    for offset in range(max(span_start - 3, 0), span_end + 4):
        origin = (
            result.rev_offset_map[offset]
            if offset < len(result.rev_offset_map)
            else None
        )
        if origin is not None:
            assert origin <= len(result.original)
        else:
            synthetic = transformed[offset:offset + 10]
            assert synthetic.startswith("<<INDENT>>") or synthetic.startswith(
                "<<DEDENT>>"
            )


def test_unicode_comment_does_not_break_span_afterward():
    result = preprocess_indentation("let a = x * 3   # → Unicode comment\nlet b = x + 1\n")
    x_index = result.transformed.rfind("x")
    orig_start, _ = result.map_span_back(x_index, x_index + 1)
    assert result.original[orig_start:orig_start + 1] == "x"


def test_unicode_span_alignment_for_diagnostics():
    source = "let 🚀 = 1\nlet a = 🧠 + x + ☃️  # x is undefined here\n"
    result = preprocess_indentation(source)
    x_index = result.transformed.find("x")
    orig_start, orig_end = result.map_span_back(x_index, x_index + 1)
    assert result.original[orig_start:orig_end] == "x"

    line_start = result.original.rfind("\n", 0, orig_start) + 1
    visual_col = len(result.original[line_start:orig_start])
    line = result.original.splitlines()[1]
    assert line[visual_col] == "x"


def test_map_span_back_out_of_range():
    result = preprocess_indentation("a = 1\n")
    assert result.map_span_back(0, len(result.rev_offset_map) + 5) is None
    assert result.map_span_back(-1, 1) is None


def test_map_span_back_over_marker_is_none():
    result = preprocess_indentation("if x:\n  y = 1\n")
    idx = result.transformed.find("<<INDENT>>")
    assert result.map_span_back(idx, idx + 1) is None


def test_offset_map_matches_transformed_length():
    result = preprocess_indentation("if x:\n  if y:\n    z = 1\n  w = 2\nu = 3\n")
    assert len(result.rev_offset_map) == len(result.transformed)


def test_mapped_characters_match_original():
    source = "if x:\n  y = 1\n  # note\nz = 2\n"
    result = preprocess_indentation(source)
    for char, origin in zip(result.transformed, result.rev_offset_map):
        if origin is not None and char != "\n":
            assert source[origin] == char


def test_empty_source():
    result = preprocess_indentation("")
    assert result == PreprocessResult(original="", transformed="", rev_offset_map=[])