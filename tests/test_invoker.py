from study_copilot.core.config import Settings
from study_copilot.services.llm.invoker import Failed, Success, Unavailable, build_model_client, invoke_model
from study_copilot.services.llm.ollama_client import OllamaClient
from study_copilot.services.llm.openai_client import OpenAIChatClient
from study_copilot.services.llm.prompts import Prompt

PROMPT = Prompt(system="sys", user="usr", max_tokens=10)


class _Client:
    name = "stub"

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error

    def complete(self, system, user, *, max_tokens, temperature):
        if self.error:
            raise self.error
        return self.reply


def test_invoke_without_client_is_unavailable():
    assert invoke_model(None, PROMPT) == Unavailable()


def test_invoke_success_strips_text():
    assert invoke_model(_Client(reply="  {\"a\": 1}\n"), PROMPT) == Success(text='{"a": 1}')


def test_invoke_never_raises():
    outcome = invoke_model(_Client(error=PermissionError("401 invalid api key")), PROMPT)
    assert isinstance(outcome, Failed)
    assert "invalid api key" in outcome.reason

    assert isinstance(invoke_model(_Client(reply=None), PROMPT), Failed)


def test_build_client_openai_requires_key():
    assert build_model_client(Settings(provider="openai", openai_api_key=None)) is None

    client = build_model_client(Settings(provider="openai", openai_api_key="sk-test", openai_model="gpt-4o-mini"))
    assert isinstance(client, OpenAIChatClient)
    assert client.name == "openai:gpt-4o-mini"


def test_build_client_ollama_and_heuristic():
    client = build_model_client(Settings(provider="ollama", ollama_model="llama3"))
    assert isinstance(client, OllamaClient)
    assert client.name == "ollama:llama3"

    assert build_model_client(Settings(provider="heuristic")) is None
    assert build_model_client(Settings(provider="something-else")) is None
