"""
Data models for selector ranking, mock synthesis and recording assembly.

All records are immutable value objects built fresh for each call.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum


class SelectorCategory(Enum):
    """Kinds of selector, in preference order."""

    ROLE = "role"
    LABEL = "label"
    TEXT = "text"
    PLACEHOLDER = "placeholder"
    TEST_ID = "testid"

    @property
    def priority(self) -> int:
        """Fixed priority for this category (lower is preferred)."""
        return _CATEGORY_PRIORITIES[self]


_CATEGORY_PRIORITIES = {
    SelectorCategory.ROLE: 1,
    SelectorCategory.LABEL: 2,
    SelectorCategory.TEXT: 3,
    SelectorCategory.PLACEHOLDER: 4,
    SelectorCategory.TEST_ID: 5,
}


class InteractionType(Enum):
    """Types of recorded user interaction."""

    CLICK = "click"
    TYPE = "type"
    NAVIGATE = "navigate"


@dataclass(frozen=True)
class ElementDescriptor:
    """Identifying attributes of one DOM element."""

    tag_name: str
    role: Optional[str] = None
    text_content: Optional[str] = None
    aria_label: Optional[str] = None
    placeholder: Optional[str] = None
    test_id: Optional[str] = None
    name: Optional[str] = None

    @property
    def trimmed_text(self) -> Optional[str]:
        """Text content without surrounding whitespace, None when blank."""
        if self.text_content is None:
            return None
        return self.text_content.strip() or None


@dataclass(frozen=True)
class SelectorSuggestion:
    """One candidate way to locate an element."""

    selector: str
    priority: int
    category: SelectorCategory

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "selector": self.selector,
            "priority": self.priority,
            "category": self.category.value,
        }


@dataclass(frozen=True)
class MockResponse:
    """Captured response half of a network exchange."""

    body: Any
    status: Optional[int] = None

    @property
    def effective_status(self) -> int:
        """Status to mock with, 200 when none was captured."""
        return self.status if self.status is not None else 200


@dataclass(frozen=True)
class NetworkExchange:
    """A captured request/response pair."""

    url: str
    method: str
    response: MockResponse


@dataclass(frozen=True)
class Interaction:
    """One recorded user action."""

    type: InteractionType
    target: Optional[ElementDescriptor] = None
    value: Optional[str] = None
    url: Optional[str] = None
    timestamp: Optional[float] = None


@dataclass(frozen=True)
class MockOutcome:
    """Result of synthesizing the mock for one exchange."""

    index: int
    url: str
    alias: Optional[str] = None
    statement: Optional[str] = None
    skip_reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.statement is None


@dataclass(frozen=True)
class StepOutcome:
    """Result of translating one interaction into test statements."""

    interaction: Interaction
    lines: List[str] = field(default_factory=list)
    skip_reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.skip_reason is not None
