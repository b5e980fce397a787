"""
Unit tests for the exception hierarchy and SDK error translation.
"""
import httpx
import pytest

import anthropic
import openai

REQUEST = httpx.Request("POST", "https://api.example.com/v1/messages")


def _status_error(sdk_error, status, headers=None):
    response = httpx.Response(status, request=REQUEST, headers=headers or {})
    return sdk_error("upstream said no", response=response, body=None)


class TestAssistantError:
    """Tests for the base error."""

    def test_context_in_str(self):
        from crm_assistant.exceptions import UpstreamRateLimitError

        error = UpstreamRateLimitError("API rate limit exceeded", retry_after=30, model="gpt-4o")
        assert str(error) == "API rate limit exceeded (retry_after=30, model=gpt-4o)"
        assert error.retry_after == 30

    def test_retry_after_default(self):
        from crm_assistant.exceptions import UpstreamRateLimitError
        assert UpstreamRateLimitError("x").retry_after == 1.0

    def test_is_retryable(self):
        from crm_assistant.exceptions import (
            is_retryable,
            UpstreamConnectionError,
            UpstreamAuthenticationError,
            ToolServerError,
        )

        assert is_retryable(UpstreamConnectionError("down"))
        assert is_retryable(ToolServerError("down"))
        assert not is_retryable(UpstreamAuthenticationError("bad key"))
        assert not is_retryable(ValueError("plain"))

    def test_user_message(self):
        from crm_assistant.exceptions import get_user_message, UpstreamTimeoutError

        assert "timed out" in get_user_message(UpstreamTimeoutError("slow"))
        assert get_user_message(RuntimeError("raw")) == "raw"


class TestTranslateProviderError:
    """Tests for mapping SDK exceptions."""

    @pytest.mark.parametrize("sdk", [anthropic, openai])
    def test_timeout(self, sdk):
        from crm_assistant.exceptions import translate_provider_error, UpstreamTimeoutError

        error = translate_provider_error(sdk.APITimeoutError(request=REQUEST), "anthropic", "m")
        assert isinstance(error, UpstreamTimeoutError)

    @pytest.mark.parametrize("sdk", [anthropic, openai])
    def test_connection(self, sdk):
        from crm_assistant.exceptions import translate_provider_error, UpstreamConnectionError

        error = translate_provider_error(sdk.APIConnectionError(request=REQUEST), "openai", "m")
        assert isinstance(error, UpstreamConnectionError)
        assert error.context == {"provider": "openai", "model": "m"}

    @pytest.mark.parametrize("sdk", [anthropic, openai])
    def test_authentication(self, sdk):
        from crm_assistant.exceptions import translate_provider_error, UpstreamAuthenticationError

        error = translate_provider_error(_status_error(sdk.AuthenticationError, 401), "p", "m")
        assert isinstance(error, UpstreamAuthenticationError)

    @pytest.mark.parametrize("sdk", [anthropic, openai])
    def test_rate_limit_with_header(self, sdk):
        from crm_assistant.exceptions import translate_provider_error, UpstreamRateLimitError

        error = translate_provider_error(
            _status_error(sdk.RateLimitError, 429, {"retry-after": "12"}), "p", "m"
        )
        assert isinstance(error, UpstreamRateLimitError)
        assert error.retry_after == 12.0

    def test_rate_limit_without_header(self):
        from crm_assistant.exceptions import translate_provider_error

        error = translate_provider_error(_status_error(openai.RateLimitError, 429), "p", "m")
        assert "retry_after" not in error.context

    @pytest.mark.parametrize("sdk", [anthropic, openai])
    def test_server_error_is_retryable(self, sdk):
        from crm_assistant.exceptions import translate_provider_error, is_retryable

        error = translate_provider_error(_status_error(sdk.InternalServerError, 500), "p", "m")
        assert is_retryable(error)
        assert error.context["status"] == 500

    @pytest.mark.parametrize("sdk", [anthropic, openai])
    def test_bad_request(self, sdk):
        from crm_assistant.exceptions import translate_provider_error, UpstreamResponseError

        error = translate_provider_error(_status_error(sdk.BadRequestError, 400), "p", "m")
        assert isinstance(error, UpstreamResponseError)
        assert not error.retryable
