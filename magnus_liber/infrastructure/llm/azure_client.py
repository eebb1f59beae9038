import json
import logging

import httpx
from openai import APIConnectionError, APIStatusError, AzureOpenAI

from ...config.settings import API_VERSION
from ...core.errors import HttpStatusError, MalformedResponseError, TransportError
from ...core.models.chat import ChatMessage
from ...core.models.completion import CompletionRequest, CompletionResult

logger = logging.getLogger(__name__)


def parse_completion(body: str) -> CompletionResult:
    """Extract the first choice's message from a chat completion body."""
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        return CompletionResult.failure(
            MalformedResponseError(f"Response is not valid JSON: {e}")
        )

    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices:
        return CompletionResult.failure(
            MalformedResponseError("Response contains no choices")
        )

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        return CompletionResult.failure(
            MalformedResponseError("First choice has no message content")
        )

    return CompletionResult.success(ChatMessage.assistant(content))


class AzureChatClient:
    """LLM client for an Azure OpenAI chat deployment."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        deployment: str,
        api_version: str = API_VERSION,
        http_client: httpx.Client | None = None,
    ):
        """Initialize Azure OpenAI client.

        Requests go to {endpoint}/openai/deployments/{deployment}/chat/completions
        with the key in the api-key header. Retries and timeouts are disabled.

        Args:
            endpoint: Resource endpoint, e.g. https://<name>.openai.azure.com/.
            api_key: Resource key.
            deployment: Deployment name.
            api_version: REST API version.
            http_client: Custom httpx client (tests inject a mock transport).
        """
        self._deployment = deployment
        self._client = AzureOpenAI(
            azure_endpoint=endpoint,
            azure_deployment=deployment,
            api_key=api_key,
            api_version=api_version,
            max_retries=0,
            timeout=None,
            http_client=http_client,
        )

    def complete(self, request: CompletionRequest) -> CompletionResult:
        """Send the request and parse the first choice."""
        try:
            raw = self._client.chat.completions.with_raw_response.create(
                model=self._deployment,
                **request.to_payload(),
            )
        except APIStatusError as e:
            return CompletionResult.failure(HttpStatusError(e.status_code, e.response.text))
        except APIConnectionError as e:
            return CompletionResult.failure(
                TransportError(f"Could not reach {self._client.base_url}: {e}")
            )

        body = raw.http_response.text
        logger.debug(f"Chat completion response: {body}")
        return parse_completion(body)

    def close(self) -> None:
        self._client.close()
