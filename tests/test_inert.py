"""Tests for inert zone masking."""

import functools

import pytest

from vlt.core.inert import (
    MaskPipeline,
    default_pipeline,
    mask_display_math,
    mask_fenced_code,
    mask_inert,
    mask_inline_code,
    mask_inline_math,
    mask_percent_comments,
)


SAMPLES = [
    "",
    "plain text with no zones",
    "a `code` b",
    "```\n[[Link]]\n```\n",
    "Before\n```\n[[Link]] and #tag\nmore content",
    "Before\n```\n```\nAfter",
    "``a ` b`` and `c`",
    "%% one %% text %% two\nlines %%",
    "<!-- a\nb --> x <!-- c -->",
    "$$\nx^2\n$$ and $y$ and $50",
    "$$$$ `` %%%% <!---->",
    "```python\ncode\r\n```\r\nafter `x` $a$\r\n",
    "üñí `çødé` $ß$ %% ∑ %%",
]


@pytest.mark.parametrize("text", SAMPLES)
def test_mask_preserves_length_and_newlines(text):
    """Masked text has the same length and newline positions as the input."""
    masked = mask_inert(text)
    assert len(masked) == len(text)
    assert [i for i, c in enumerate(masked) if c == "\n"] == [
        i for i, c in enumerate(text) if c == "\n"
    ]


def test_mask_inline_code_keeps_backticks():
    """Only the content of an inline code span is blanked."""
    assert mask_inert("a `code` b") == "a `    ` b"


def test_mask_fenced_code_block():
    """Content between fences is blanked, fences are kept."""
    text = "Intro\n```python\nsee [[Link]]\n```\nOutro [[Real]]"
    masked = mask_fenced_code(text)
    assert "[[Link]]" not in masked
    assert "```python\n" in masked
    assert masked.endswith("```\nOutro [[Real]]")


def test_mask_unclosed_fence_runs_to_eof():
    """An unclosed fence masks everything after it."""
    text = "Before\n```\n[[Link]] and #tag\nmore content"
    masked = mask_inert(text)
    assert masked.startswith("Before\n```\n")
    assert "[[Link]]" not in masked
    assert "#tag" not in masked
    assert masked.count("\n") == text.count("\n")


def test_mask_fence_with_four_backticks_and_language():
    """Openers may use more than three backticks and a language tag."""
    text = "````js\nlet a = '[[X]]'\n```\nafter"
    masked = mask_inert(text)
    assert "[[X]]" not in masked
    assert masked.endswith("```\nafter")


def test_mask_closing_fence_with_trailing_whitespace():
    """Trailing spaces after the closing fence are tolerated."""
    text = "```\n[[A]]\n```   \n[[B]]"
    masked = mask_inert(text)
    assert "[[A]]" not in masked
    assert "[[B]]" in masked


def test_mask_multiple_fenced_blocks():
    """Text between two fenced blocks stays visible."""
    text = "```\n[[A]]\n```\n[[B]]\n```\n[[C]]\n```\n"
    masked = mask_inert(text)
    assert "[[A]]" not in masked
    assert "[[B]]" in masked
    assert "[[C]]" not in masked


def test_mask_empty_fenced_block():
    """An empty block changes nothing around it."""
    text = "Before\n```\n```\nAfter"
    assert mask_inert(text) == text


def test_mask_double_backtick_containing_single_backtick():
    """A lone backtick inside a double-backtick span is content."""
    text = "``a ` [[X]]`` and [[Y]]"
    masked = mask_inline_code(text)
    assert "[[X]]" not in masked
    assert "[[Y]]" in masked
    assert masked.startswith("``") and "`` and" in masked


def test_mask_double_backtick_delimiters_do_not_pair_with_later_code():
    """Leftover ``...`` delimiters never open a new single-backtick span."""
    text = "``a`` then [[Visible]] and `b`"
    masked = mask_inline_code(text)
    assert "[[Visible]]" in masked
    assert masked.endswith("`b`".replace("b", " "))


def test_mask_inline_code_does_not_cross_lines():
    """An unmatched backtick does not pair with one on the next line."""
    text = "a ` [[X]]\nb ` [[Y]]"
    assert mask_inert(text) == text


def test_mask_multiple_inline_code_per_line():
    """Each span on a line is masked independently."""
    masked = mask_inert("`[[A]]` [[B]] `[[C]]`")
    assert masked == "`     ` [[B]] `     `"


def test_mask_percent_comments_separately():
    """Two comments are two spans, not one from first open to last close."""
    text = "%% a %% [[Between]] %% b %%"
    masked = mask_percent_comments(text)
    assert "[[Between]]" in masked
    assert masked == "%%   %% [[Between]] %%   %%"


def test_mask_percent_comment_multiline():
    """Comments may span lines; newlines survive."""
    text = "x %%\n[[Hidden]]\n%% y"
    masked = mask_inert(text)
    assert masked == "x %%\n          \n%% y"


def test_mask_html_comments():
    """HTML comment content is blanked, delimiters are kept."""
    text = "<!-- [[A]] --> [[B]] <!--\n#tag\n-->"
    masked = mask_inert(text)
    assert "[[A]]" not in masked
    assert "[[B]]" in masked
    assert "#tag" not in masked
    assert masked.count("<!--") == 2 and masked.count("-->") == 2


def test_mask_display_math():
    """Display math may span lines."""
    text = "$$\n[[X]] = y\n$$ [[Z]]"
    masked = mask_display_math(text)
    assert "[[X]]" not in masked
    assert masked.endswith("$$ [[Z]]")


def test_mask_inline_math():
    """Inline math content is blanked, including one-character spans."""
    assert mask_inline_math("so $x^2$ and $y$") == "so $   $ and $ $"


@pytest.mark.parametrize(
    "text",
    [
        "The cost is $50 per unit.",
        "Pay $ 50 for it.",
        "Between $100 and $200 range.",
        "Total: $500",
        "from $5 to\n$10",
    ],
)
def test_mask_inline_math_ignores_dollar_amounts(text):
    """Dollar amounts are not math."""
    assert mask_inert(text) == text


def test_display_math_runs_before_inline_math():
    """A $$ pair is not split into inline math matches."""
    text = "$$a$$ b $c$"
    masked = mask_inert(text)
    assert masked == "$$ $$ b $ $"


def test_display_math_delimiter_does_not_open_inline_math():
    """The closing $$ never pairs with a later single $."""
    text = "$$a$$[[Keep]]$"
    masked = mask_inert(text)
    assert "[[Keep]]" in masked


def test_earlier_zone_hides_delimiters_from_later_passes():
    """Delimiters inside an already-masked zone never trigger a later pass."""
    text = "```\n%% not a comment\n```\n[[Visible]]\n%% real %%"
    masked = mask_inert(text)
    assert "[[Visible]]" in masked
    assert masked.endswith("%%      %%")

    text = "`%%` [[Seen]] `%%`"
    assert "[[Seen]]" in mask_inert(text)

    text = "`$` [[Seen]] `$`"
    assert "[[Seen]]" in mask_inert(text)


def test_pass_order_matters():
    """Running comments before code lets code delimiters leak."""
    text = "```\n%% open\n```\n[[Visible]]\n%% close %%"
    reordered = MaskPipeline([mask_percent_comments, mask_fenced_code])
    assert "[[Visible]]" not in reordered(text)
    assert "[[Visible]]" in default_pipeline()(text)


def test_default_pipeline_order():
    """The default pipeline runs six passes, code first and inline math last."""
    pipeline = default_pipeline()
    names = [p.__name__ for p in pipeline.passes]
    assert names == [
        "mask_fenced_code",
        "mask_inline_code",
        "mask_percent_comments",
        "mask_html_comments",
        "mask_display_math",
        "mask_inline_math",
    ]
    assert len(pipeline) == 6


def test_custom_pipeline_is_used():
    """mask_inert uses the pipeline it is given."""
    only_code = MaskPipeline([mask_inline_code])
    text = "`x` %% y %%"
    assert mask_inert(text, only_code) == "` ` %% y %%"


def test_mask_non_zone_text_unchanged():
    """Text without zones is returned as is."""
    text = "# Heading\n\nSee [[Note]] and #tag.\n"
    assert mask_inert(text) == text


def test_pipeline_repr_with_unnamed_pass():
    """Passes without a __name__, such as partials, still have a repr."""
    pipeline = MaskPipeline([mask_inline_code, functools.partial(mask_inline_math)])
    text = repr(pipeline)
    assert text.startswith("MaskPipeline([mask_inline_code, functools.partial(")
    assert pipeline("`a` $b$") == "` ` $ $"
