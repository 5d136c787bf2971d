"""OpenAI Responses API client for food text extraction."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from macro_monitor.domain.errors import ConfigurationError
from macro_monitor.services.parsing import TextClient


@dataclass
class OpenAITextClient(TextClient):
    """Text client backed by OpenAI Responses API.

    The SDK client is created on first use so the app can start without a key.
    """

    client: AsyncOpenAI | None = None
    api_key: str = ""

    @classmethod
    def create(cls, api_key: str) -> "OpenAITextClient":
        """Create an OpenAI text client."""
        return cls(api_key=api_key)

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        instructions: str,
        text: str,
        schema: dict[str, object],
    ) -> str:
        """Call OpenAI Responses API with structured outputs."""
        response = await self._client().responses.create(
            model=model,
            input=[
                {"role": "system", "content": instructions},
                {"role": "user", "content": text},
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "food_items",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=store,
        )
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.client is not None:
            await self.client.close()

    def _client(self) -> AsyncOpenAI:
        if self.client is None:
            if not self.api_key:
                raise ConfigurationError("Missing OPENAI_API_KEY env var")
            self.client = AsyncOpenAI(api_key=self.api_key)
        return self.client
