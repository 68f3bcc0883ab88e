from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Union

from study_copilot.core.config import Settings
from study_copilot.services.llm.prompts import Prompt

logger = logging.getLogger(__name__)


class ModelClient(Protocol):
    name: str

    def complete(self, system: str, user: str, *, max_tokens: int, temperature: float) -> str:
        ...


# ----------------------------
# Invocation outcomes
# ----------------------------

@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class Unavailable:
    pass


@dataclass(frozen=True)
class Failed:
    reason: str


ModelOutcome = Union[Success, Unavailable, Failed]


def invoke_model(client: ModelClient | None, prompt: Prompt) -> ModelOutcome:
    """
    Call the model once. Nothing raised by the client escapes: network,
    auth, rate-limit and timeout errors all come back as Failed.
    """
    if client is None:
        return Unavailable()

    try:
        text = client.complete(
            prompt.system,
            prompt.user,
            max_tokens=prompt.max_tokens,
            temperature=prompt.temperature,
        )
    except Exception as e:
        logger.warning("model_call_failed client=%s error=%s: %s", _client_name(client), type(e).__name__, e)
        return Failed(reason=f"{type(e).__name__}: {e}")

    text = (text or "").strip()
    if not text:
        logger.warning("model_call_empty client=%s", _client_name(client))
        return Failed(reason="empty response")
    return Success(text=text)


def _client_name(client: ModelClient) -> str:
    return getattr(client, "name", type(client).__name__)


def build_model_client(cfg: Settings) -> ModelClient | None:
    """
    Returns None when no model is configured (heuristic provider, or openai
    without an API key). That is a normal mode, not an error.
    """
    provider = (cfg.provider or "").strip().lower()

    if provider == "openai":
        if not cfg.openai_api_key:
            logger.info("model_unconfigured provider=openai reason=missing_api_key")
            return None
        from study_copilot.services.llm.openai_client import OpenAIChatClient

        return OpenAIChatClient(
            api_key=cfg.openai_api_key,
            model=cfg.openai_model,
            timeout_s=cfg.openai_timeout_sec,
        )

    if provider == "ollama":
        from study_copilot.services.llm.ollama_client import OllamaClient

        return OllamaClient(
            base_url=cfg.ollama_base_url,
            model=cfg.ollama_model,
            timeout_s=cfg.ollama_timeout_sec,
        )

    if provider != "heuristic":
        logger.warning("model_unconfigured provider=%s reason=unknown_provider", provider)
    return None
