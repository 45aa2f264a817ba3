"""
Approximate token counting.

Rough GPT-style token estimates used for response metrics. These are
heuristics, not a tokenizer: counts are close enough for display but
must not be used for billing.

Dependencies: unicodedata (stdlib)
System role: Token usage estimation
"""

import unicodedata

# Per-message framing overhead (role tags, start/end markers)
MESSAGE_OVERHEAD_TOKENS = 4


def _is_word_char(char: str) -> bool:
    return unicodedata.category(char)[0] in ("L", "N")


def _is_special_char(char: str) -> bool:
    return unicodedata.category(char)[0] in ("P", "S")


def estimate_tokens(text: str) -> int:
    """
    Estimate token count from word and punctuation counts.

    Approximates ~1.3 tokens per word plus half a token per punctuation
    or symbol character.

    Args:
        text: Input text

    Returns:
        int: Estimated tokens (at least 1 for non-empty text)
    """
    if not text:
        return 0

    words = 0
    special_chars = 0
    in_word = False

    for char in text:
        if _is_word_char(char):
            if not in_word:
                words += 1
                in_word = True
        else:
            in_word = False
            if _is_special_char(char):
                special_chars += 1

    tokens = int(words * 1.3 + special_chars * 0.5)
    return max(tokens, 1)


def count_tokens_for_messages(system_prompt: str, user_message: str, context: str) -> int:
    """
    Estimate prompt tokens for a system + user exchange.

    Args:
        system_prompt: System instructions (may be empty)
        user_message: User turn
        context: Retrieved context block

    Returns:
        int: Estimated input tokens including message overhead
    """
    system_tokens = 0
    if system_prompt:
        system_tokens = estimate_tokens(system_prompt) + MESSAGE_OVERHEAD_TOKENS

    user_tokens = estimate_tokens(user_message) + MESSAGE_OVERHEAD_TOKENS
    return system_tokens + user_tokens + estimate_tokens(context)
