"""
Test suite for approximate token counting.

System role: Verification of token usage estimates
"""

from rag_service.core.tokenizer import (
    MESSAGE_OVERHEAD_TOKENS,
    count_tokens_for_messages,
    estimate_tokens,
)


class TestEstimateTokens:
    """Word and punctuation based estimates."""

    def test_empty_text_is_zero(self):
        assert estimate_tokens("") == 0

    def test_words_and_punctuation(self):
        # 3 words * 1.3 + 2 punctuation * 0.5 = 4.9
        assert estimate_tokens("Hello, big world!") == 4

    def test_non_empty_text_is_at_least_one(self):
        assert estimate_tokens(" ") == 1


class TestCountTokensForMessages:
    """Message overhead accounting."""

    def test_system_prompt_adds_overhead(self):
        without_system = count_tokens_for_messages("", "hello", "")
        with_system = count_tokens_for_messages("be nice", "hello", "")

        assert with_system - without_system == estimate_tokens("be nice") + MESSAGE_OVERHEAD_TOKENS

    def test_context_is_counted(self):
        base = count_tokens_for_messages("", "hello", "")
        with_context = count_tokens_for_messages("", "hello", "some retrieved context")

        assert with_context == base + estimate_tokens("some retrieved context")
