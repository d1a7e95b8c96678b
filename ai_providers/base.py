"""
Base AI Provider - Abstract Interface
Auto-MQM - model backends for segment evaluation

A provider turns a list of messages into one text answer. Prompt building
and answer parsing live with the MQM evaluator, not here.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from dataclasses import dataclass
from enum import Enum


class AIProviderType(Enum):
    """Supported AI Providers"""
    CLAUDE = "claude"


@dataclass
class AIMessage:
    """One conversation turn"""
    role: str  # "user" or "assistant"; the system prompt is passed separately
    content: str


@dataclass
class AIResponse:
    """A provider's answer to one completion request"""
    content: str
    model: str
    provider: AIProviderType
    usage: Optional[Dict[str, int]] = None  # input_tokens / output_tokens
    finish_reason: Optional[str] = None
    raw_response: Optional[Any] = None

    @property
    def total_tokens(self) -> int:
        if not self.usage:
            return 0
        return self.usage.get("input_tokens", 0) + self.usage.get("output_tokens", 0)

    @property
    def truncated(self) -> bool:
        """The model stopped at max_tokens; the JSON answer is likely cut off"""
        return self.finish_reason == "max_tokens"


@dataclass
class AIConfig:
    """Provider configuration"""
    api_key: str
    model: str
    max_tokens: int = 4000
    temperature: float = 0.0  # evaluations should be repeatable
    base_url: Optional[str] = None  # For custom endpoints
    max_retries: int = 2  # SDK-level retries on connection errors / 429 / 5xx
    timeout: Optional[float] = None  # SDK request timeout in seconds


class BaseAIProvider(ABC):
    """
    Abstract base class for AI providers.

    Subclasses create their SDK client lazily in initialize() and answer
    prompts in complete(). SDK errors are not caught here.
    """

    def __init__(self, config: AIConfig):
        self.config = config
        self._client = None

    @property
    @abstractmethod
    def provider_type(self) -> AIProviderType:
        pass

    @property
    @abstractmethod
    def supported_models(self) -> List[str]:
        """Model ids known to work with the MQM prompt"""
        pass

    @abstractmethod
    async def initialize(self) -> None:
        """Create the SDK client"""
        pass

    @abstractmethod
    async def complete(
        self,
        messages: List[AIMessage],
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        """
        Generate a completion from the AI model.

        Args:
            messages: Conversation so far, last message from the user
            system_prompt: Optional system prompt
            **kwargs: Per-call overrides (model, max_tokens, temperature)

        Returns:
            AIResponse with the generated text
        """
        pass

    async def close(self) -> None:
        """Release the SDK client, if one was created"""
        client, self._client = self._client, None
        if client is not None and hasattr(client, "close"):
            await client.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} model={self.config.model}>"
