"""
Code generation components: selector ranking, mock synthesis and
recording-to-test assembly.
"""

from .models import (
    ElementDescriptor,
    Interaction,
    InteractionType,
    MockOutcome,
    MockResponse,
    NetworkExchange,
    SelectorCategory,
    SelectorSuggestion,
    StepOutcome,
)
from .selectors import SelectorRanker, suggest_selectors
from .mocks import MockSynthesizer, generate_mocks
from .recording import RecordingAssembler, generate_test

__all__ = [
    "ElementDescriptor",
    "Interaction",
    "InteractionType",
    "MockOutcome",
    "MockResponse",
    "NetworkExchange",
    "SelectorCategory",
    "SelectorSuggestion",
    "StepOutcome",
    "SelectorRanker",
    "suggest_selectors",
    "MockSynthesizer",
    "generate_mocks",
    "RecordingAssembler",
    "generate_test",
]
