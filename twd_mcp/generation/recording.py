"""
Test file assembly from browser recordings.

Combines mock synthesis, selector ranking and interaction translation into
a complete TWD test file.
"""

import logging
from typing import List, Optional

from .mocks import MockSynthesizer
from .models import Interaction, InteractionType, NetworkExchange, StepOutcome
from .selectors import SelectorRanker

logger = logging.getLogger(__name__)

DEFAULT_TEST_NAME = "recorded user flow"
TEST_CASE_NAME = "should complete the recorded flow"
BODY_INDENT = "    "

IMPORT_LINES = [
    'import { twd, userEvent, screenDom } from "twd-js";',
    'import { describe, it, beforeEach } from "twd-js/runner";',
]

ASSERTION_PLACEHOLDER = [
    "// TODO: Add assertions",
    '// const message = await twd.get(".message");',
    '// message.should("be.visible");',
]


# Characters that end a JS line comment or an unescaped literal line.
_LINE_TERMINATORS = (
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _escape_line_terminators(text: str) -> str:
    for char, escape in _LINE_TERMINATORS:
        text = text.replace(char, escape)
    return text


def escape_comment(text: str) -> str:
    """Keep text on one line so it stays inside a ``//`` comment."""
    return _escape_line_terminators(text)


def escape_double_quoted(text: str) -> str:
    """Escape text for a double-quoted JS string literal."""
    return _escape_line_terminators(text.replace("\\", "\\\\").replace('"', '\\"'))


def escape_single_quoted(text: str) -> str:
    """Escape text for a single-quoted JS string literal."""
    return _escape_line_terminators(text.replace("\\", "\\\\").replace("'", "\\'"))


class RecordingAssembler:
    """Generates a TWD test file from recorded interactions and traffic."""

    def __init__(
        self,
        selector_ranker: Optional[SelectorRanker] = None,
        mock_synthesizer: Optional[MockSynthesizer] = None,
    ):
        """Initialize the assembler.

        Args:
            selector_ranker: Ranker used to pick a selector per interaction target
            mock_synthesizer: Synthesizer used for the mock block
        """
        self.selector_ranker = selector_ranker or SelectorRanker()
        self.mock_synthesizer = mock_synthesizer or MockSynthesizer()

    def assemble(
        self,
        interactions: List[Interaction],
        exchanges: Optional[List[NetworkExchange]] = None,
        test_name: Optional[str] = None,
    ) -> str:
        """Generate a complete test file.

        Args:
            interactions: Recorded actions in execution order
            exchanges: Captured network traffic to mock before the actions
            test_name: Name for the describe block

        Returns:
            Test source text
        """
        exchanges = exchanges or []
        if test_name is None:
            test_name = DEFAULT_TEST_NAME

        lines = list(IMPORT_LINES)
        lines.append("")
        lines.append(f'describe("{escape_double_quoted(test_name)}", () => {{')
        lines.append("  beforeEach(() => {")
        lines.append("    // Clear mocks before each test")
        lines.append("    twd.clearRequestMockRules();")
        lines.append("  });")
        lines.append("")
        lines.append(f'  it("{TEST_CASE_NAME}", async () => {{')

        # Mocks must be registered before the actions that trigger them.
        if exchanges:
            lines.append(f"{BODY_INDENT}// Define mocks before interactions")
            lines.extend(self._indent(self.mock_synthesizer.synthesize(exchanges)))
            lines.append("")

        outcomes = [self.translate(interaction) for interaction in interactions]
        for outcome in outcomes:
            lines.extend(BODY_INDENT + line for line in outcome.lines)

        lines.append("")
        lines.extend(BODY_INDENT + line for line in ASSERTION_PLACEHOLDER)
        lines.append("  });")
        lines.append("});")

        skipped = [outcome for outcome in outcomes if outcome.skipped]
        logger.info(
            f"Assembled test '{test_name}' from {len(interactions)} interactions",
            extra={
                "metadata": {
                    "interactions": len(interactions),
                    "network_calls": len(exchanges),
                    "unselectable": len(skipped),
                }
            },
        )

        return "\n".join(lines)

    def translate(self, interaction: Interaction) -> StepOutcome:
        """Translate one interaction into unindented test statements."""
        if interaction.type == InteractionType.NAVIGATE:
            if not interaction.url:
                return StepOutcome(interaction=interaction)
            return StepOutcome(
                interaction=interaction,
                lines=[
                    f"// Navigate to: {escape_comment(interaction.url)}",
                    "// Note: Navigation may need to be handled in test setup",
                ],
            )

        target = interaction.target
        suggestion = self.selector_ranker.best(target) if target else None
        if suggestion is None:
            tag_name = target.tag_name if target else "unknown element"
            logger.warning(
                f"Could not generate selector for {interaction.type.value} on {tag_name}",
                extra={"metadata": {"type": interaction.type.value, "tag_name": tag_name}},
            )
            return StepOutcome(
                interaction=interaction,
                lines=[
                    f"// TODO: Could not generate selector for "
                    f"{interaction.type.value} on {escape_comment(tag_name)}"
                ],
                skip_reason="no selector",
            )

        if interaction.type == InteractionType.CLICK:
            return StepOutcome(
                interaction=interaction,
                lines=[f"await userEvent.click({suggestion.selector});"],
            )

        if interaction.value:
            value = escape_single_quoted(interaction.value)
            return StepOutcome(
                interaction=interaction,
                lines=[f"await userEvent.type({suggestion.selector}, '{value}');"],
            )
        return StepOutcome(interaction=interaction)

    def _indent(self, block: str) -> List[str]:
        return [BODY_INDENT + line if line else "" for line in block.split("\n")]


def generate_test(
    interactions: List[Interaction],
    exchanges: Optional[List[NetworkExchange]] = None,
    test_name: Optional[str] = None,
) -> str:
    """Generate a test file with a default assembler."""
    return RecordingAssembler().assemble(interactions, exchanges, test_name)
