from functools import lru_cache

from study_copilot.core.config import settings
from study_copilot.services.llm.invoker import ModelClient, build_model_client


@lru_cache(maxsize=1)
def get_model_client() -> ModelClient | None:
    """Built once per process from settings; None means heuristics only."""
    return build_model_client(settings)
