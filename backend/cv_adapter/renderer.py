"""
LaTeX rendering of adapted CV text.

Used when the provider did not return its own LaTeX document. The template
lives in `templates/moderncv.tex.j2` and uses LaTeX-friendly Jinja2
delimiters (`\\VAR{...}`) so braces and `%` comments in the skeleton are left
alone.
"""
import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
SUMMARY_LINES = 3

LATEX_ESCAPES = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "#": r"\#",
    "$": r"\$",
    "%": r"\%",
    "&": r"\&",
    "^": r"\textasciicircum{}",
    "_": r"\_",
    "~": r"\textasciitilde{}",
}
# One pass over the input: replacements are never rescanned, so the braces
# emitted for \textbackslash{} stay unescaped.
_LATEX_SPECIALS = re.compile("|".join(re.escape(c) for c in LATEX_ESCAPES))

env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    block_start_string=r"\BLOCK{",
    block_end_string="}",
    variable_start_string=r"\VAR{",
    variable_end_string="}",
    comment_start_string=r"\#{",
    comment_end_string="}",
    autoescape=False,
    undefined=StrictUndefined,
)
cv_template = env.get_template("moderncv.tex.j2")


def escape_latex(text: str) -> str:
    """Escape characters that are special in LaTeX.

    >>> escape_latex("50% of $100 & more")
    '50\\\\% of \\\\$100 \\\\& more'
    """
    if not text:
        return ""
    return _LATEX_SPECIALS.sub(lambda m: LATEX_ESCAPES[m.group(0)], text)


def render_document(plain_text: str) -> str:
    """Wrap escaped plain text in a complete moderncv document.

    The summary section gets the first three lines, the experience section
    the whole text. Always returns a full document, also for empty input.
    """
    escaped = escape_latex(plain_text or "")
    summary = "\n\\par\n".join(escaped.split("\n")[:SUMMARY_LINES])
    return cv_template.render(summary=summary, body=escaped)
