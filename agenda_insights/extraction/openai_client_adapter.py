import httpx
import openai

from agenda_insights.extraction.client_base import BaseCompletionClient
from agenda_insights.extraction.models import CompletionResponse


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion transport built on the OpenAI-compatible async chat API.

    Passing ``azure_endpoint`` switches to Azure OpenAI, where ``model`` is the
    deployment name.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        system_prompt: str = "",
        temperature: float = 0.2,
        base_url: str | None = None,
        azure_endpoint: str | None = None,
        api_version: str | None = None,
    ) -> None:
        if azure_endpoint:
            self._client: openai.AsyncOpenAI = openai.AsyncAzureOpenAI(
                api_key=api_key,
                azure_endpoint=azure_endpoint,
                api_version=api_version,
                timeout=timeout_seconds,
            )
        else:
            self._client = openai.AsyncOpenAI(
                api_key=api_key,
                timeout=timeout_seconds,
                base_url=base_url,
            )
        self._model = model
        self._system_prompt = system_prompt
        self._temperature = max(0.0, min(0.2, temperature))

    async def complete(self, prompt: str, max_tokens: int) -> CompletionResponse:
        messages = []
        if self._system_prompt:
            messages.append({"role": "system", "content": self._system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                temperature=self._temperature,
                max_tokens=max_tokens,
                messages=messages,  # type: ignore[arg-type]
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            return CompletionResponse(
                success=False,
                error_message=f"AI provider network error: {exc.__class__.__name__}",
            )
        except openai.APIStatusError as exc:
            return CompletionResponse(
                success=False,
                error_message=f"AI provider API error: HTTP {exc.status_code}",
            )
        except openai.APIError as exc:
            return CompletionResponse(
                success=False,
                error_message=f"AI provider API error: {exc.__class__.__name__}",
            )

        if not response.choices:
            return CompletionResponse(success=False, error_message="AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            return CompletionResponse(success=False, error_message="AI returned empty response")
        return CompletionResponse(success=True, content=content)

    async def aclose(self) -> None:
        await self._client.close()
