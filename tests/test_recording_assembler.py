"""
Unit tests for the recording assembler.
"""

from unittest.mock import MagicMock

import pytest

from twd_mcp.generation.mocks import MockSynthesizer
from twd_mcp.generation.models import (
    ElementDescriptor,
    Interaction,
    InteractionType,
    MockResponse,
    NetworkExchange,
)
from twd_mcp.generation.recording import (
    DEFAULT_TEST_NAME,
    RecordingAssembler,
    escape_comment,
    escape_double_quoted,
    escape_single_quoted,
    generate_test,
)
from twd_mcp.generation.selectors import SelectorRanker


def click(**target):
    return Interaction(type=InteractionType.CLICK, target=ElementDescriptor(**target))


def type_into(value, **target):
    return Interaction(type=InteractionType.TYPE, target=ElementDescriptor(**target), value=value)


class TestEscaping:
    """Test cases for JS string escaping helpers."""

    def test_single_quotes(self):
        assert escape_single_quoted("a'b") == "a\\'b"

    def test_backslash_escaped_first(self):
        assert escape_single_quoted("C:\\tmp'") == "C:\\\\tmp\\'"

    def test_line_breaks(self):
        assert escape_single_quoted("line1\nline2") == "line1\\nline2"

    def test_double_quotes(self):
        assert escape_double_quoted('say "hi"') == 'say \\"hi\\"'

    def test_comment_text_kept_on_one_line(self):
        assert escape_comment("a\nb\rc\u2028d\u2029e") == "a\\nb\\rc\\u2028d\\u2029e"

    def test_unicode_line_separators_in_strings(self):
        assert escape_single_quoted("a\u2028b") == "a\\u2028b"
        assert escape_double_quoted("a\u2029b") == "a\\u2029b"


class TestRecordingAssembler:
    """Test cases for RecordingAssembler."""

    @pytest.fixture
    def assembler(self):
        return RecordingAssembler()

    def test_empty_recording(self, assembler):
        """Test the skeleton generated for an empty recording."""
        result = assembler.assemble([])

        assert result == "\n".join(
            [
                'import { twd, userEvent, screenDom } from "twd-js";',
                'import { describe, it, beforeEach } from "twd-js/runner";',
                "",
                'describe("recorded user flow", () => {',
                "  beforeEach(() => {",
                "    // Clear mocks before each test",
                "    twd.clearRequestMockRules();",
                "  });",
                "",
                '  it("should complete the recorded flow", async () => {',
                "",
                "    // TODO: Add assertions",
                '    // const message = await twd.get(".message");',
                '    // message.should("be.visible");',
                "  });",
                "});",
            ]
        )
        assert DEFAULT_TEST_NAME in result
        assert "twd.mockRequest" not in result
        assert "userEvent." not in result.split("\n", 2)[2]

    def test_full_recording(self, assembler, login_recording, users_exchange):
        result = assembler.assemble(login_recording, [users_exchange], "login")

        assert result == "\n".join(
            [
                'import { twd, userEvent, screenDom } from "twd-js";',
                'import { describe, it, beforeEach } from "twd-js/runner";',
                "",
                'describe("login", () => {',
                "  beforeEach(() => {",
                "    // Clear mocks before each test",
                "    twd.clearRequestMockRules();",
                "  });",
                "",
                '  it("should complete the recorded flow", async () => {',
                "    // Define mocks before interactions",
                "    // Generated mock handlers",
                '    twd.mockRequest("ApiUsers", {',
                '      method: "GET",',
                '      url: "/api/users",',
                "      response: [",
                "        {",
                '          "id": 1,',
                '          "name": "Ada"',
                "        }",
                "      ],",
                "      status: 200",
                "    });",
                "",
                "    // Navigate to: http://localhost:5173/login",
                "    // Note: Navigation may need to be handled in test setup",
                "    await userEvent.type(screenDom.getByRole('textbox'), 'ada@example.com');",
                "    await userEvent.click(screenDom.getByRole('button', { name: /Sign in/i }));",
                "",
                "    // TODO: Add assertions",
                '    // const message = await twd.get(".message");',
                '    // message.should("be.visible");',
                "  });",
                "});",
            ]
        )

    def test_mocks_before_interactions(self, assembler, users_exchange, login_exchange):
        result = assembler.assemble(
            [click(tag_name="button", text_content="Load"), click(tag_name="a", text_content="Next")],
            [users_exchange, login_exchange],
        )

        first_action = result.index("await userEvent.")
        assert result.rindex("twd.mockRequest(") < first_action
        assert result.index("// Define mocks before interactions") < first_action

    def test_blank_lines_in_mock_block_not_indented(self, assembler, users_exchange, login_exchange):
        result = assembler.assemble([], [users_exchange, login_exchange])

        assert "    });\n\n    twd.mockRequest(\"ApiLogin\"" in result
        assert all(line == line.rstrip() for line in result.split("\n"))

    def test_navigate_emits_comment_only(self, assembler):
        result = assembler.assemble(
            [Interaction(type=InteractionType.NAVIGATE, url="https://app.test/home")]
        )

        assert "    // Navigate to: https://app.test/home" in result
        assert "await userEvent" not in result

    @pytest.mark.parametrize("separator", ["\n", "\r", "\u2028", "\u2029"])
    def test_navigate_url_with_line_break_stays_commented(self, assembler, separator):
        url = f"https://x/{separator}await userEvent.click(document.body);"

        outcome = assembler.translate(Interaction(type=InteractionType.NAVIGATE, url=url))

        assert len(outcome.lines) == 2
        assert all(line.startswith("//") for line in outcome.lines)
        assert all(separator not in line for line in outcome.lines)
        result = assembler.assemble([Interaction(type=InteractionType.NAVIGATE, url=url)])
        assert "\n    await userEvent.click(document.body);" not in result

    def test_navigate_without_url_emits_nothing(self, assembler):
        assert assembler.assemble(
            [Interaction(type=InteractionType.NAVIGATE)]
        ) == assembler.assemble([])

    def test_navigate_does_not_rank_selectors(self):
        ranker = MagicMock(spec=SelectorRanker)
        assembler = RecordingAssembler(selector_ranker=ranker)

        assembler.assemble(
            [
                Interaction(
                    type=InteractionType.NAVIGATE,
                    target=ElementDescriptor(tag_name="button"),
                    url="https://app.test/",
                )
            ]
        )

        ranker.best.assert_not_called()
        ranker.rank.assert_not_called()

    def test_type_escapes_single_quotes(self, assembler):
        result = assembler.assemble([type_into("a'b", tag_name="div", test_id="email")])

        assert "    await userEvent.type(screenDom.getByTestId('email'), 'a\\'b');" in result

    def test_type_without_value_emits_nothing(self, assembler):
        result = assembler.assemble(
            [Interaction(type=InteractionType.TYPE, target=ElementDescriptor(tag_name="input"))]
        )

        assert result == assembler.assemble([])

    def test_unselectable_element_emits_todo(self, assembler):
        result = assembler.assemble(
            [click(tag_name="div"), click(tag_name="button", text_content="OK")]
        )

        assert "    // TODO: Could not generate selector for click on div" in result
        assert "await userEvent.click(screenDom.getByRole('button', { name: /OK/i }));" in result

    @pytest.mark.parametrize("separator", ["\n", "\r", "\u2028", "\u2029"])
    def test_unselectable_tag_with_line_break_stays_commented(self, assembler, separator):
        outcome = assembler.translate(click(tag_name=f"div{separator}foo();"))

        assert outcome.skipped
        assert len(outcome.lines) == 1
        assert outcome.lines[0].startswith("// TODO: Could not generate selector for click on div")
        assert separator not in outcome.lines[0]
        result = assembler.assemble([click(tag_name=f"div{separator}foo();")])
        assert "\n    foo();" not in result

    def test_unselectable_type_emits_todo(self, assembler):
        result = assembler.assemble([type_into("x", tag_name="span")])

        assert "// TODO: Could not generate selector for type on span" in result

    def test_interaction_order_preserved(self, assembler):
        result = assembler.assemble(
            [
                click(tag_name="button", text_content="First"),
                click(tag_name="button", text_content="Second"),
                click(tag_name="button", text_content="Third"),
            ]
        )

        assert result.index("/First/") < result.index("/Second/") < result.index("/Third/")

    def test_test_name_escaped(self, assembler):
        result = assembler.assemble([], test_name='the "happy" path')

        assert 'describe("the \\"happy\\" path", () => {' in result

    def test_empty_test_name_kept(self, assembler):
        assert 'describe("", () => {' in assembler.assemble([], test_name="")

    def test_uses_injected_mock_synthesizer_once(self, users_exchange):
        synthesizer = MagicMock(spec=MockSynthesizer)
        synthesizer.synthesize.return_value = "// Generated mock handlers\nmock();"
        assembler = RecordingAssembler(mock_synthesizer=synthesizer)

        result = assembler.assemble([], [users_exchange, users_exchange])

        synthesizer.synthesize.assert_called_once_with([users_exchange, users_exchange])
        assert "    mock();" in result

    def test_no_exchanges_skips_synthesizer(self):
        synthesizer = MagicMock(spec=MockSynthesizer)
        RecordingAssembler(mock_synthesizer=synthesizer).assemble([], [])

        synthesizer.synthesize.assert_not_called()

    def test_malformed_exchange_skipped(self, assembler):
        exchanges = [
            NetworkExchange(url="::bad::", method="GET", response=MockResponse(body={})),
            NetworkExchange(url="https://x/ok", method="GET", response=MockResponse(body={})),
        ]

        result = assembler.assemble([], exchanges)

        assert result.count("twd.mockRequest(") == 1
        assert 'twd.mockRequest("Ok", {' in result

    def test_translate_outcomes(self, assembler):
        skipped = assembler.translate(click(tag_name="div"))
        done = assembler.translate(click(tag_name="button"))

        assert skipped.skipped is True
        assert done.skipped is False
        assert done.lines == ["await userEvent.click(screenDom.getByRole('button'));"]

    def test_deterministic(self, assembler, login_recording, users_exchange):
        first = assembler.assemble(login_recording, [users_exchange])
        second = assembler.assemble(login_recording, [users_exchange])

        assert first == second

    def test_generate_test_function(self, login_recording):
        assert generate_test(login_recording) == RecordingAssembler().assemble(login_recording)
