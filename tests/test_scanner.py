import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from boa.compiler.compact import minify_params, minify_value
from boa.compiler.lexer import prepare_source
from boa.compiler.scanner import find_comment_start, find_top_level_colon, split_top_level
from boa.compiler.selectors import expand_pseudo_aliases, has_hover, normalize_selector
from boa.compiler.shadow import extract_comment, render_comment
from boa.core.models import Comment

# --- Quote-Aware Scanner ---

def test_colon_search_skips_brackets_and_quotes():
    assert find_top_level_colon("a[href='x:y']:hover") == 13
    assert find_top_level_colon('content: ":"') == 7
    assert find_top_level_colon("(a: b)") == -1

def test_comma_split_respects_nesting():
    parts = split_top_level(".a, :is(.b, .c), [data-x='1,2']")

    assert parts == [".a", " :is(.b, .c)", " [data-x='1,2']"]

def test_comma_split_drops_empty_tail():
    assert split_top_level(".a,") == [".a"]
    assert split_top_level(".a") == [".a"]

def test_comment_search_skips_quoted_markers():
    assert find_comment_start('content: "//" // x') == 14
    assert find_comment_start("color: red") == -1

def test_comment_search_honors_escaped_quotes():
    assert find_comment_start('content: "a\\"b" // c') == 16

def test_comment_search_ignores_parentheses():
    assert find_comment_start("background: url(//cdn/x.png)") == 16

# --- Comment Extractor ---

def test_extract_line_comment():
    main, comment = extract_comment("color: blue // important")

    assert main == "color: blue"
    assert comment == Comment(kind="line", text="important", raw="// important")

def test_extract_block_comment():
    main, comment = extract_comment("a /* note */")

    assert main == "a"
    assert comment == Comment(kind="block", text="note", raw="/* note */")

def test_unterminated_block_comment_runs_to_end_of_line():
    main, comment = extract_comment("a /* note")

    assert main == "a"
    assert comment.text == "note"
    assert render_comment(comment) == "/* note */"

def test_render_comments():
    assert render_comment(Comment(kind="line", text="", raw="//")) == "/* */"
    assert render_comment(Comment(kind="line", text="hello", raw="// hello")) == "/* hello */"
    assert render_comment(Comment(kind="block", text="fancy", raw="/*** fancy ***/")) == "/*** fancy ***/"
    assert render_comment(Comment(kind="block", text="plain")) == "/* plain */"
    assert render_comment(None) == ""

# --- Selector Normalizer ---

def test_nested_parts_get_parent_reference():
    assert normalize_selector(".title", True) == "& .title"
    assert normalize_selector(":hover", True) == "&:hover"
    assert normalize_selector("::before", True) == "&::before"
    assert normalize_selector("[open]", True) == "&[open]"
    assert normalize_selector("&.active", True) == "&.active"
    assert normalize_selector(".theme-dark &", True) == ".theme-dark &"

def test_nested_lists_are_rewritten_per_part():
    assert normalize_selector(".a, .b", True) == "& .a, & .b"
    assert normalize_selector(".a, .b", True, compact=True) == "& .a,& .b"
    assert normalize_selector(":is(.a, .b) span", True) == "&:is(.a, .b) span"

def test_top_level_selectors_are_not_prefixed():
    assert normalize_selector(".a,.b", False) == ".a,.b"
    assert normalize_selector(".a, .b", False, compact=True) == ".a,.b"
    assert normalize_selector("  body  ", False) == "body"

def test_hocus_alias_matches_whole_token_only():
    assert expand_pseudo_aliases("a:hocus") == "a:is(:hover, :focus-within)"
    assert expand_pseudo_aliases("a:hocused") == "a:hocused"
    assert has_hover(normalize_selector(":hocus", True))

# --- Compact Helpers ---

def test_minify_value():
    assert minify_value("rgba( 0, 0, 0, .5 )") == "rgba(0,0,0,.5)"
    assert minify_value("1px  solid   red") == "1px solid red"
    assert minify_value("calc(1px + 2px) solid") == "calc(1px + 2px)solid"

def test_minify_params_keeps_media_keywords_apart():
    assert minify_params("(min-width: 40rem) and (hover: hover)") == "(min-width:40rem) and (hover:hover)"
    assert minify_params("screen,  print") == "screen,print"

def test_prepare_source_strips_comments_and_maps_offsets():
    lines = prepare_source("a /* x */ b\n// c\nd // e", strip=True)

    assert [line.text for line in lines] == ["a  b", "", "d "]
    assert lines[0].offset == 0
    assert lines[2].offset == 17

def test_prepare_source_keeps_unterminated_block_comment():
    lines = prepare_source("a /* open\nb", strip=True)

    assert [line.text for line in lines] == ["a /* open", "b"]
