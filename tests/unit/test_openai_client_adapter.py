from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from credential_verifier.vision.exceptions import (
    InvalidCredentialsError,
    MalformedResponseError,
    QuotaExhaustedError,
    ServiceUnavailableError,
)
from credential_verifier.vision.models import ImagePart
from credential_verifier.vision.openai_client_adapter import OpenAIVisionClientAdapter

TARGET = "credential_verifier.vision.openai_client_adapter.openai.OpenAI"


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _status_error(cls: type[openai.APIStatusError], status: int, message: str) -> Exception:
    request = httpx.Request("POST", "https://api.example/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return cls(message, response=response, body=None)


def _call(mock_client: MagicMock, images: list[ImagePart] | None = None) -> str:
    with patch(TARGET, return_value=mock_client):
        adapter = OpenAIVisionClientAdapter(api_key="k", timeout_seconds=30)
        return adapter.create_completion(
            model="gemini-2.0-flash",
            temperature=0.4,
            system_prompt="system",
            user_prompt="Compare these documents",
            images=images or [],
        )


class TestOpenAIVisionClientAdapter:
    def test_returns_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response('{"ok": true}')
        assert _call(mock_client) == '{"ok": true}'

    def test_disables_retries(self) -> None:
        with patch(TARGET) as openai_cls:
            OpenAIVisionClientAdapter(api_key="k", timeout_seconds=12, base_url="https://x/v1")
        kwargs = openai_cls.call_args.kwargs
        assert kwargs["max_retries"] == 0
        assert kwargs["timeout"] == 12
        assert kwargs["base_url"] == "https://x/v1"

    def test_sends_images_as_data_urls(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        _call(mock_client, [ImagePart(data=b"png", mime_type="image/png")])

        messages = mock_client.chat.completions.create.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "system"}
        parts = messages[1]["content"]
        assert parts[0] == {"type": "text", "text": "Compare these documents"}
        assert parts[1]["image_url"]["url"] == "data:image/png;base64,cG5n"

    def test_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        with pytest.raises(MalformedResponseError, match="empty response"):
            _call(mock_client)

    def test_no_choices(self) -> None:
        mock_client = MagicMock()
        response = MagicMock()
        response.choices = []
        mock_client.chat.completions.create.return_value = response
        with pytest.raises(MalformedResponseError, match="no choices"):
            _call(mock_client)


class TestErrorMapping:
    def test_rate_limit_is_quota(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = _status_error(
            openai.RateLimitError, 429, "Resource has been exhausted"
        )
        with pytest.raises(QuotaExhaustedError):
            _call(mock_client)

    def test_authentication_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = _status_error(
            openai.AuthenticationError, 401, "Incorrect API key provided"
        )
        with pytest.raises(InvalidCredentialsError):
            _call(mock_client)

    def test_bad_request_mentioning_api_key(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = _status_error(
            openai.BadRequestError, 400, "API key not valid. Please pass a valid API key."
        )
        with pytest.raises(InvalidCredentialsError):
            _call(mock_client)

    def test_server_error_is_unavailable(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = _status_error(
            openai.InternalServerError, 503, "The model is overloaded"
        )
        with pytest.raises(ServiceUnavailableError, match="API error"):
            _call(mock_client)

    def test_connection_error_is_unavailable(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        with pytest.raises(ServiceUnavailableError, match="network error"):
            _call(mock_client)

    def test_timeout_is_unavailable(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APITimeoutError(
            request=MagicMock()
        )
        with pytest.raises(ServiceUnavailableError):
            _call(mock_client)
