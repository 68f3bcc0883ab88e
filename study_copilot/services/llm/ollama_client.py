from __future__ import annotations

from typing import Any, Dict

import httpx


class OllamaClient:
    """
    Minimal Ollama client for local generation.

    Uses /api/generate (simple) to keep integration stable.
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout_s: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout_s = timeout_s
        self._transport = transport

    @property
    def name(self) -> str:
        return f"ollama:{self.model}"

    def complete(self, system: str, user: str, *, max_tokens: int, temperature: float) -> str:
        url = f"{self.base_url}/api/generate"

        payload: Dict[str, Any] = {
            "model": self.model,
            "prompt": user,
            "system": system,
            "stream": False,
            "options": {
                "num_predict": max_tokens,  # hard cap output tokens
                "temperature": temperature,
            },
        }

        timeout = httpx.Timeout(self.timeout_s, connect=10.0)
        with httpx.Client(timeout=timeout, transport=self._transport) as client:
            r = client.post(url, json=payload)
            r.raise_for_status()
            data = r.json()

        # Ollama returns {"response": "...", ...}
        return (data.get("response") or "").strip()
