"""
Template engine for link formats.

Templates are plain strings with ``{...}`` expressions:

* ``{title}`` substitutes a metadata field (empty when missing);
* ``{upload_date|YYYY-MM-DD}`` renders a date field with a format;
* ``{channel?by {channel}:unknown channel}`` picks a branch depending on
  whether a field has a non-empty value. A literal colon inside a branch is
  written ``\\:``.

``{url}`` always resolves to the URL being formatted. Expressions are evaluated
innermost first and the template is re-scanned until nothing changes, which is
how conditional branches can hold further expressions.
"""

import re

import structlog

from smart_link_formatter.models.common import Metadata
from smart_link_formatter.utils.dates import parse_date, render_date

logger = structlog.get_logger(__name__)

# Fields whose values may be rendered with a date format.
DATE_FIELDS = frozenset({"upload_date", "created_at", "updated_at", "published", "date"})

_EXPRESSION = re.compile(r"\{([^{}]*)\}")
_UNESCAPED_COLON = re.compile(r"(?<!\\):")

# Characters with meaning inside an expression are swapped for private-use
# code points in substituted text, so values never parse as template syntax.
_SYNTAX_CHARS = {
    "{": "\ue000",
    "}": "\ue001",
    ":": "\ue002",
    "?": "\ue003",
    "|": "\ue004",
    "\\": "\ue005",
}
_PROTECTED = str.maketrans(_SYNTAX_CHARS)
_UNPROTECTED = {v: k for k, v in _SYNTAX_CHARS.items()}

# Stand-ins already present in the input are prefixed with this escape so
# they survive restoration unchanged.
_LITERAL_ESCAPE = "\ue006"
_LITERAL = re.compile("[\ue000-\ue006]")
_RESTORE = re.compile("\ue006(.)|([\ue000-\ue005])", re.DOTALL)


def format_template(template: str, metadata: Metadata, url: str) -> str:
    """
    Substitute metadata into a template.

    Never raises: malformed expressions become empty strings.

    Args:
        template: Template text
        metadata: Field values for the link
        url: The URL being formatted

    Returns:
        The rendered text
    """
    if not template:
        return ""

    text = _escape_literals(template)
    while True:
        result = _EXPRESSION.sub(
            lambda match: _evaluate(match.group(1), metadata, url).translate(_PROTECTED),
            text,
        )
        if result == text:
            break
        text = result

    return _RESTORE.sub(lambda m: m.group(1) or _UNPROTECTED[m.group(2)], text)


def _escape_literals(text: str) -> str:
    return _LITERAL.sub(lambda m: _LITERAL_ESCAPE + m.group(0), text)


def _evaluate(expression: str, metadata: Metadata, url: str) -> str:
    try:
        question = expression.find("?")
        pipe = expression.find("|")
        if question != -1 and (pipe == -1 or question < pipe):
            field = expression[:question].strip()
            return _evaluate_conditional(field, expression[question + 1 :], metadata)

        name, _, fmt = expression.partition("|")
        return _resolve_variable(name.strip(), fmt.strip(), metadata, url)
    except Exception as e:
        logger.debug("template_expression_error", expression=expression, error=str(e))
        return ""


def _evaluate_conditional(field: str, body: str, metadata: Metadata) -> str:
    branches = _UNESCAPED_COLON.split(body, maxsplit=1)
    present = branches[0]
    absent = branches[1] if len(branches) > 1 else ""
    chosen = present if _is_present(field, metadata) else absent
    return chosen.replace("\\:", ":")


def _is_present(field: str, metadata: Metadata) -> bool:
    if field == "url":
        return True
    value = metadata.get(field)
    return value is not None and str(value) != ""


def _resolve_variable(name: str, fmt: str, metadata: Metadata, url: str) -> str:
    if name == "url":
        return _escape_literals(url)

    value = metadata.get(name)
    if value is None:
        return ""

    value = str(value)
    if fmt and name in DATE_FIELDS:
        parsed = parse_date(value)
        if parsed is not None:
            return render_date(parsed, fmt)

    return _escape_literals(value)
