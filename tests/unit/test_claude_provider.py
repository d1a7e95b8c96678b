#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit Tests for the Claude provider

The Anthropic client is replaced with a mock; no network access.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from ai_providers import AIConfig, AIMessage, AIProviderType, AIResponse, ClaudeProvider


def settings(**overrides):
    values = dict(
        model="claude-sonnet-4-20250514",
        max_tokens=4000,
        temperature=0.0,
        anthropic_base_url=None,
        max_retries=3,
        request_timeout=30.0,
    )
    values.update(overrides)
    namespace = SimpleNamespace(**values)
    namespace.get_api_key = lambda: "sk-test"
    return namespace


def api_response(*blocks, stop_reason="end_turn"):
    return SimpleNamespace(
        content=list(blocks),
        model="claude-sonnet-4-20250514",
        usage=SimpleNamespace(input_tokens=120, output_tokens=80),
        stop_reason=stop_reason,
    )


@pytest.fixture
def provider():
    provider = ClaudeProvider(AIConfig(api_key="sk-test", model="claude-sonnet-4-20250514"))
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=api_response(
        SimpleNamespace(type="text", text='{"mqmIssues": '),
        SimpleNamespace(type="tool_use", input={}),
        SimpleNamespace(type="text", text="[]}"),
    ))
    client.close = AsyncMock()
    provider._client = client
    return provider


class TestFromSettings:
    def test_config_from_settings(self):
        provider = ClaudeProvider.from_settings(settings())
        assert provider.config.api_key == "sk-test"
        assert provider.config.max_retries == 3
        assert provider.config.timeout == 30.0

    def test_model_override(self):
        assert ClaudeProvider.from_settings(settings(), model="claude-3-5-haiku-20241022").config.model == \
            "claude-3-5-haiku-20241022"

    def test_missing_key(self):
        broken = settings()

        def no_key():
            raise ValueError("ANTHROPIC_API_KEY not set in .env")

        broken.get_api_key = no_key
        with pytest.raises(ValueError):
            ClaudeProvider.from_settings(broken)


class TestComplete:
    @pytest.mark.asyncio
    async def test_joins_text_blocks(self, provider):
        response = await provider.complete([AIMessage("user", "Evaluate")], system_prompt="MQM")

        assert response.content == '{"mqmIssues": []}'
        assert response.provider is AIProviderType.CLAUDE
        assert response.total_tokens == 200
        assert not response.truncated

    @pytest.mark.asyncio
    async def test_request_parameters(self, provider):
        await provider.complete([AIMessage("user", "Evaluate")], system_prompt="MQM", model="other-model")

        kwargs = provider._client.messages.create.call_args.kwargs
        assert kwargs["model"] == "other-model"
        assert kwargs["system"] == "MQM"
        assert kwargs["temperature"] == 0.0
        assert kwargs["messages"] == [{"role": "user", "content": "Evaluate"}]

    @pytest.mark.asyncio
    async def test_no_system_prompt(self, provider):
        await provider.complete([AIMessage("user", "Evaluate")])
        assert "system" not in provider._client.messages.create.call_args.kwargs

    @pytest.mark.asyncio
    async def test_close(self, provider):
        client = provider._client
        await provider.close()

        client.close.assert_awaited_once()
        assert provider._client is None


class TestAIResponse:
    def test_truncated(self):
        response = AIResponse("{", "m", AIProviderType.CLAUDE, finish_reason="max_tokens")
        assert response.truncated
        assert response.total_tokens == 0
