"""
AI Providers Package
Auto-MQM - model backends for segment evaluation

Supports:
- Anthropic Claude (claude-sonnet-4, claude-3.5-sonnet, etc.)

Usage:
    from ai_providers import ClaudeProvider, AIConfig, AIMessage

    provider = ClaudeProvider(AIConfig(api_key="...", model="claude-sonnet-4-20250514"))
    response = await provider.complete(
        [AIMessage(role="user", content="...")],
        system_prompt="You are an MQM annotator."
    )
    print(response.content)
"""

from .base import (
    BaseAIProvider,
    AIProviderType,
    AIMessage,
    AIResponse,
    AIConfig
)

from .claude_provider import ClaudeProvider

PROVIDER_REGISTRY = {
    AIProviderType.CLAUDE: ClaudeProvider,
}

__all__ = [
    # Base classes
    "BaseAIProvider",
    "AIProviderType",
    "AIMessage",
    "AIResponse",
    "AIConfig",

    # Providers
    "ClaudeProvider",
    "PROVIDER_REGISTRY",
]

__version__ = "1.0.0"
