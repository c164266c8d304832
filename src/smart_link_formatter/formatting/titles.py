"""User-defined regex rules applied to formatted link text."""

import re
from collections.abc import Iterable

import structlog

from smart_link_formatter.models.common import TitleReplacement

logger = structlog.get_logger(__name__)


def apply_title_replacements(text: str, rules: Iterable[TitleReplacement]) -> str:
    """
    Apply enabled replacement rules in order.

    A rule with an invalid pattern is skipped and logged; the remaining rules
    still run.
    """
    for rule in rules:
        if not rule.enabled:
            continue
        try:
            text = re.sub(rule.pattern, rule.replacement, text)
        except re.error as e:
            logger.warning("title_replacement_invalid", pattern=rule.pattern, error=str(e))
    return text
