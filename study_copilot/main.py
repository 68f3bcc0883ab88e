from fastapi import FastAPI
from pydantic import BaseModel

from study_copilot.api.ai import router as ai_router
from study_copilot.api.content import router as content_router
from study_copilot.core.config import settings
from study_copilot.core.logging_utils import configure_logging

configure_logging()

app = FastAPI(title="Study Copilot API", version="0.1.0")
app.include_router(content_router)
app.include_router(ai_router)


class HealthResponse(BaseModel):
    ok: bool
    service: str
    version: str
    provider: str


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True, service="api", version=app.version, provider=settings.provider)
