"""Template rendering and markdown link construction."""

from smart_link_formatter.formatting.link import wrap_in_markdown_link
from smart_link_formatter.formatting.template import DATE_FIELDS, format_template
from smart_link_formatter.formatting.titles import apply_title_replacements

__all__ = [
    "DATE_FIELDS",
    "apply_title_replacements",
    "format_template",
    "wrap_in_markdown_link",
]
