"""
Claude AI Provider - Anthropic Messages API
Auto-MQM - model backends for segment evaluation
"""

from typing import Optional, List, Dict

import anthropic

from .base import (
    BaseAIProvider,
    AIProviderType,
    AIMessage,
    AIResponse,
    AIConfig
)


class ClaudeProvider(BaseAIProvider):
    """
    Anthropic Claude AI Provider

    Any Messages API model id is accepted; MODELS lists the ones the MQM
    prompt has been used with.
    """

    MODELS = {
        "claude-sonnet-4-20250514": "Claude Sonnet 4 (Default)",
        "claude-3-7-sonnet-20250219": "Claude 3.7 Sonnet",
        "claude-3-5-sonnet-20241022": "Claude 3.5 Sonnet",
        "claude-3-5-haiku-20241022": "Claude 3.5 Haiku",
    }

    DEFAULT_MODEL = "claude-sonnet-4-20250514"

    @classmethod
    def from_settings(cls, settings, model: Optional[str] = None) -> "ClaudeProvider":
        """
        Provider configured from Settings.

        Raises:
            ValueError: ANTHROPIC_API_KEY is not set
        """
        return cls(AIConfig(
            api_key=settings.get_api_key(),
            model=model or settings.model or cls.DEFAULT_MODEL,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
            base_url=settings.anthropic_base_url,
            max_retries=settings.max_retries,
            timeout=settings.request_timeout or None,
        ))

    @property
    def provider_type(self) -> AIProviderType:
        return AIProviderType.CLAUDE

    @property
    def supported_models(self) -> List[str]:
        return list(self.MODELS.keys())

    async def initialize(self) -> None:
        options = {
            "api_key": self.config.api_key,
            "base_url": self.config.base_url,
            "max_retries": self.config.max_retries,
        }
        if self.config.timeout:
            options["timeout"] = self.config.timeout
        self._client = anthropic.AsyncAnthropic(**options)

    @staticmethod
    def _to_api_messages(messages: List[AIMessage]) -> List[Dict[str, str]]:
        return [{"role": msg.role, "content": msg.content} for msg in messages]

    async def complete(
        self,
        messages: List[AIMessage],
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        """One Messages API call; SDK errors propagate to the caller"""
        if not self._client:
            await self.initialize()

        request = {
            "model": kwargs.get("model") or self.config.model,
            "max_tokens": kwargs.get("max_tokens", self.config.max_tokens),
            "temperature": kwargs.get("temperature", self.config.temperature),
            "messages": self._to_api_messages(messages),
        }
        if system_prompt:
            request["system"] = system_prompt

        response = await self._client.messages.create(**request)

        # Only text blocks carry the answer
        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )

        return AIResponse(
            content=text,
            model=response.model,
            provider=self.provider_type,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens
            },
            finish_reason=response.stop_reason,
            raw_response=response
        )
