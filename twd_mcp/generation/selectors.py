"""
Selector ranking for recorded DOM elements.

Suggests Testing Library ``screenDom`` queries for an element, preferring
accessible selectors: role > label > text > placeholder > test id.
"""

import logging
from types import MappingProxyType
from typing import List, Optional

from .models import ElementDescriptor, SelectorCategory, SelectorSuggestion

logger = logging.getLogger(__name__)

MAX_PATTERN_LENGTH = 30

IMPLICIT_ROLES = MappingProxyType(
    {
        "button": "button",
        "a": "link",
        "input": "textbox",
        "select": "combobox",
        "textarea": "textbox",
        "img": "img",
        "nav": "navigation",
        "main": "main",
        "header": "banner",
        "footer": "contentinfo",
        "article": "article",
        "aside": "complementary",
        "form": "form",
    }
)

# Characters with special meaning inside a /.../ regex literal.
_PATTERN_SPECIALS = frozenset(".*+?^${}()|[]\\/")
_LINE_BREAKS = {
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def escape_pattern(text: str, max_length: int = MAX_PATTERN_LENGTH) -> str:
    """Escape text for a regex literal and cap it at max_length characters.

    The cap applies to the escaped text. An escape sequence is never split,
    so the result is always a valid pattern body.
    """
    escaped = []
    length = 0
    for char in text:
        if char in _LINE_BREAKS:
            token = _LINE_BREAKS[char]
        elif char in _PATTERN_SPECIALS:
            token = "\\" + char
        else:
            token = char

        if length + len(token) > max_length:
            break
        escaped.append(token)
        length += len(token)

    return "".join(escaped)


def resolve_role(element: ElementDescriptor) -> Optional[str]:
    """Explicit role if set, otherwise the role implied by the tag."""
    if element.role:
        return element.role
    return IMPLICIT_ROLES.get(element.tag_name.lower())


class SelectorRanker:
    """Builds ranked selector suggestions for element descriptors."""

    def rank(self, element: ElementDescriptor) -> List[SelectorSuggestion]:
        """Suggest selectors for an element, best first.

        Args:
            element: Descriptor of the element to locate

        Returns:
            Suggestions sorted by ascending priority; empty when the element
            has nothing to select it by
        """
        suggestions = []
        text = element.trimmed_text

        role = resolve_role(element)
        if role:
            suggestions.append(self._role_suggestion(role, element.aria_label or text))

        if element.aria_label:
            suggestions.append(
                self._suggestion(
                    f"screenDom.getByLabelText(/{escape_pattern(element.aria_label)}/i)",
                    SelectorCategory.LABEL,
                )
            )

        if text:
            suggestions.append(
                self._suggestion(
                    f"screenDom.getByText(/{escape_pattern(text)}/i)",
                    SelectorCategory.TEXT,
                )
            )

        if element.placeholder:
            suggestions.append(
                self._suggestion(
                    f"screenDom.getByPlaceholderText(/{escape_pattern(element.placeholder)}/i)",
                    SelectorCategory.PLACEHOLDER,
                )
            )

        if element.test_id:
            suggestions.append(
                self._suggestion(
                    f"screenDom.getByTestId('{element.test_id}')",
                    SelectorCategory.TEST_ID,
                )
            )

        suggestions.sort(key=lambda s: s.priority)

        logger.debug(
            f"Ranked {len(suggestions)} selectors for <{element.tag_name}>",
            extra={
                "metadata": {
                    "tag_name": element.tag_name,
                    "categories": [s.category.value for s in suggestions],
                }
            },
        )
        return suggestions

    def best(self, element: ElementDescriptor) -> Optional[SelectorSuggestion]:
        """Top-ranked suggestion, or None when nothing matches."""
        suggestions = self.rank(element)
        return suggestions[0] if suggestions else None

    def _role_suggestion(self, role: str, accessible_name: Optional[str]) -> SelectorSuggestion:
        if accessible_name:
            selector = (
                f"screenDom.getByRole('{role}', "
                f"{{ name: /{escape_pattern(accessible_name)}/i }})"
            )
        else:
            selector = f"screenDom.getByRole('{role}')"
        return self._suggestion(selector, SelectorCategory.ROLE)

    def _suggestion(self, selector: str, category: SelectorCategory) -> SelectorSuggestion:
        return SelectorSuggestion(
            selector=selector, priority=category.priority, category=category
        )


def suggest_selectors(element: ElementDescriptor) -> List[SelectorSuggestion]:
    """Rank selectors for an element with a default ranker."""
    return SelectorRanker().rank(element)
