"""Masking of inert zones (code, comments, math) in note text.

Every pass blanks the interior of one zone type with spaces and keeps the
delimiters and newlines, so offsets and line numbers of the masked text line
up with the original.
"""

import re
from collections.abc import Callable, Iterable

MaskPass = Callable[[str], str]

FENCE_OPEN_RE = re.compile(r"^`{3,}[^`\s]*[ \t]*\r?\n", re.MULTILINE)
FENCE_CLOSE_RE = re.compile(r"^```[ \t\r]*$", re.MULTILINE)
DOUBLE_BACKTICK_RE = re.compile(r"``((?:(?!``)[^\n])+)``")
SINGLE_BACKTICK_RE = re.compile(r"(?<!`)`([^`\n]+)`(?!`)")
PERCENT_COMMENT_RE = re.compile(r"%%(.+?)%%", re.DOTALL)
HTML_COMMENT_RE = re.compile(r"<!--(.*?)-->", re.DOTALL)
DISPLAY_MATH_RE = re.compile(r"\$\$(.+?)\$\$", re.DOTALL)
INLINE_MATH_RE = re.compile(r"(?<!\$)\$([^\s$](?:[^$\n]*[^\s$])?)\$(?!\$)")


def _blank(chars: list[str], start: int, end: int) -> None:
    for i in range(start, end):
        if chars[i] != "\n":
            chars[i] = " "


def _mask_groups(pattern: re.Pattern[str], text: str) -> str:
    chars = None
    for m in pattern.finditer(text):
        if chars is None:
            chars = list(text)
        _blank(chars, m.start(1), m.end(1))
    return text if chars is None else "".join(chars)


def mask_fenced_code(text: str) -> str:
    """Blank the lines between ``` fences; an unclosed fence runs to EOF."""
    chars = None
    pos = 0
    while pos < len(text):
        opening = FENCE_OPEN_RE.search(text, pos)
        if opening is None:
            break
        if chars is None:
            chars = list(text)
        content_start = opening.end()
        closing = FENCE_CLOSE_RE.search(text, content_start)
        if closing is None:
            _blank(chars, content_start, len(text))
            break
        _blank(chars, content_start, closing.start())
        pos = closing.end()
    return text if chars is None else "".join(chars)


def mask_inline_code(text: str) -> str:
    # ``double`` spans go first so a lone backtick inside one is content.
    text = _mask_groups(DOUBLE_BACKTICK_RE, text)
    return _mask_groups(SINGLE_BACKTICK_RE, text)


def mask_percent_comments(text: str) -> str:
    return _mask_groups(PERCENT_COMMENT_RE, text)


def mask_html_comments(text: str) -> str:
    return _mask_groups(HTML_COMMENT_RE, text)


def mask_display_math(text: str) -> str:
    return _mask_groups(DISPLAY_MATH_RE, text)


def mask_inline_math(text: str) -> str:
    """Blank ``$x$`` spans.

    Content must start and end with a non-space, non-``$`` character, so
    dollar amounts like ``$50`` or ``$100 and $200`` stay untouched.
    """
    return _mask_groups(INLINE_MATH_RE, text)


class MaskPipeline:
    """An ordered, immutable sequence of mask passes.

    Order is significant: a pass only sees delimiters that survived the
    passes before it.
    """

    def __init__(self, passes: Iterable[MaskPass]):
        self.passes: tuple[MaskPass, ...] = tuple(passes)

    def __call__(self, text: str) -> str:
        for mask_pass in self.passes:
            text = mask_pass(text)
        return text

    def __len__(self) -> int:
        return len(self.passes)

    def __repr__(self) -> str:
        names = ", ".join(getattr(p, "__name__", repr(p)) for p in self.passes)
        return f"MaskPipeline([{names}])"


def default_pipeline() -> MaskPipeline:
    return MaskPipeline(
        [
            mask_fenced_code,
            mask_inline_code,
            mask_percent_comments,
            mask_html_comments,
            mask_display_math,
            mask_inline_math,
        ]
    )


def mask_inert(text: str, pipeline: MaskPipeline | None = None) -> str:
    """Return ``text`` with every inert zone blanked."""
    if pipeline is None:
        pipeline = default_pipeline()
    return pipeline(text)
