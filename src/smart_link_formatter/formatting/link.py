"""Wrap formatted text into a markdown link."""

import re

EMBED_MARKER = "!"

# First "[...]" whose opening bracket is not escaped; "\]" may appear inside.
_LABEL = re.compile(r"(?<!\\)\[((?:\\.|[^\\\]])*)\]")


def wrap_in_markdown_link(formatted_text: str, url: str) -> str:
    """
    Turn formatted text into a markdown link to ``url``.

    The first bracketed span becomes the link label and everything around it
    is kept, so ``[Title] by Channel`` becomes ``[Title](url) by Channel``.
    Text without a bracketed span becomes the label as a whole. A leading
    ``!`` is kept as an embed marker.

    Args:
        formatted_text: Output of the template engine
        url: Link target

    Returns:
        Markdown link text
    """
    if formatted_text.startswith(EMBED_MARKER):
        return EMBED_MARKER + wrap_in_markdown_link(formatted_text[len(EMBED_MARKER) :], url)

    match = _LABEL.search(formatted_text)
    if match is None:
        return f"[{formatted_text.strip()}]({url})"

    prefix = formatted_text[: match.start()]
    suffix = formatted_text[match.end() :]

    # Templates such as "[{title}]({url})" already spell out the target.
    target = f"({url})"
    if suffix.startswith(target):
        suffix = suffix[len(target) :]

    return f"{prefix}[{match.group(1)}]({url}){suffix}"
