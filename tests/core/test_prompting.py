"""
Test suite for augmented prompt assembly.

System role: Verification of context joining and system prompt precedence
"""

from unittest.mock import MagicMock

from rag_service.core.prompting import (
    CONTEXT_SEPARATOR,
    build_context,
    build_system_prompt,
    resolve_system_prompt,
)
from rag_service.models.chunk import Chunk, SimilarityResult


def _result(content: str, similarity: float) -> SimilarityResult:
    return SimilarityResult(chunk=Chunk(id=content, content=content), similarity=similarity)


class TestBuildContext:
    """Context block assembly."""

    def test_joins_in_ranked_order(self):
        results = [_result("first", 0.9), _result("second", 0.5)]

        assert build_context(results) == f"first{CONTEXT_SEPARATOR}second"

    def test_no_results_gives_empty_context(self):
        assert build_context([]) == ""


class TestBuildSystemPrompt:
    """System prompt augmentation."""

    def test_empty_context_returns_base_prompt(self):
        assert build_system_prompt("Be helpful.", "") == "Be helpful."

    def test_context_is_appended_under_knowledge_base_heading(self):
        prompt = build_system_prompt("Be helpful.", "Paris is in France.")

        assert prompt == (
            "Be helpful.\n\nKNOWLEDGE BASE:\nParis is in France.\n\n"
            "Use this knowledge to answer questions naturally."
        )

    def test_braces_in_context_are_preserved(self):
        prompt = build_system_prompt("Base", "config = {key: value}")

        assert "config = {key: value}" in prompt


class TestResolveSystemPrompt:
    """Precedence: request, stored, configured."""

    def test_request_value_wins(self):
        source = MagicMock(return_value="stored")

        assert resolve_system_prompt("request", "configured", source) == "request"
        source.assert_not_called()

    def test_stored_value_beats_configured(self):
        assert resolve_system_prompt(None, "configured", lambda: "stored") == "stored"

    def test_configured_used_when_nothing_else(self):
        assert resolve_system_prompt("   ", "configured", lambda: None) == "configured"

    def test_failing_stored_source_falls_back_to_configured(self):
        source = MagicMock(side_effect=RuntimeError("settings store down"))

        assert resolve_system_prompt(None, "configured", source) == "configured"
