"""
Augmented prompt assembly.

Joins retrieved fragments into a context block and folds it into the
system prompt sent to the generation backend.

Dependencies: langchain_core.prompts
System role: Prompt template for retrieval-augmented generation
"""

import logging
from collections.abc import Callable, Sequence

from langchain_core.prompts import PromptTemplate

from rag_service.models.chunk import SimilarityResult

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"

KNOWLEDGE_BASE_PROMPT = PromptTemplate.from_template(
    """{base_prompt}

KNOWLEDGE BASE:
{context}

Use this knowledge to answer questions naturally."""
)

SystemPromptSource = Callable[[], str | None]


def context_texts(results: Sequence[SimilarityResult]) -> list[str]:
    """Fragment texts in ranked order."""
    return [result.chunk.content for result in results]


def build_context(results: Sequence[SimilarityResult]) -> str:
    """
    Concatenate retrieved fragment texts into a context block.

    Args:
        results: Search results, highest similarity first

    Returns:
        str: Fragments joined by CONTEXT_SEPARATOR (empty if no results)
    """
    return CONTEXT_SEPARATOR.join(context_texts(results))


def build_system_prompt(base_prompt: str, context: str) -> str:
    """
    Append the context block to the system prompt.

    Args:
        base_prompt: Resolved system prompt
        context: Context block from build_context

    Returns:
        str: Augmented system prompt, or base_prompt unchanged when context is empty
    """
    if not context:
        return base_prompt
    return KNOWLEDGE_BASE_PROMPT.format(base_prompt=base_prompt, context=context)


def resolve_system_prompt(
    request_prompt: str | None,
    configured_prompt: str,
    stored_source: SystemPromptSource | None = None,
) -> str:
    """
    Pick the effective system prompt.

    Precedence: request value, then the stored default, then the
    configured default. A failing stored source is logged and skipped.

    Args:
        request_prompt: Prompt supplied with the request
        configured_prompt: Prompt from settings
        stored_source: Optional callable returning the stored default

    Returns:
        str: Effective base system prompt
    """
    if request_prompt and request_prompt.strip():
        return request_prompt

    if stored_source is not None:
        try:
            stored = stored_source()
        except Exception as e:
            logger.warning(
                "Stored system prompt unavailable, using configured default",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
        else:
            if stored and stored.strip():
                logger.debug("Using stored system prompt")
                return stored

    logger.debug("Using configured system prompt")
    return configured_prompt
