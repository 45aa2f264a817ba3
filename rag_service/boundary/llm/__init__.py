"""
Generation client boundary layer.

- OpenRouterClient: chat completions with SSE streaming
- BedrockClient: Converse API with event-stream streaming

Dependencies: httpx, botocore
System role: LLM adapters
"""

from rag_service.boundary.llm.base import GenerationClient
from rag_service.boundary.llm.bedrock import BedrockClient
from rag_service.boundary.llm.factory import create_generation_clients
from rag_service.boundary.llm.openrouter import OpenRouterClient

__all__ = ["BedrockClient", "GenerationClient", "OpenRouterClient", "create_generation_clients"]
