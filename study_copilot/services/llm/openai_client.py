from __future__ import annotations

import httpx
from openai import OpenAI


class OpenAIChatClient:
    """
    ChatCompletions-backed text completion.

    SDK retries are disabled: a failed call degrades to the heuristic
    generators instead of being retried.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout_s: float = 60.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("OPENAI_API_KEY is missing")
        self.model = model
        self._client = OpenAI(api_key=api_key, timeout=timeout_s, max_retries=0, http_client=http_client)

    @property
    def name(self) -> str:
        return f"openai:{self.model}"

    def complete(self, system: str, user: str, *, max_tokens: int, temperature: float) -> str:
        chat = self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return (chat.choices[0].message.content or "").strip()
