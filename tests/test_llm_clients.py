import json

import httpx
import pytest

from study_copilot.services.llm.ollama_client import OllamaClient
from study_copilot.services.llm.openai_client import OpenAIChatClient


# -----------------------
# Ollama
# -----------------------
def test_ollama_complete_sends_generate_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": '  {"overview": "o"}\n', "done": True})

    client = OllamaClient("http://ollama.local:11434/", "llama3", transport=httpx.MockTransport(handler))
    text = client.complete("be brief", "summarize this", max_tokens=500, temperature=0.7)

    assert text == '{"overview": "o"}'
    assert seen["url"] == "http://ollama.local:11434/api/generate"
    assert seen["body"] == {
        "model": "llama3",
        "prompt": "summarize this",
        "system": "be brief",
        "stream": False,
        "options": {"num_predict": 500, "temperature": 0.7},
    }


def test_ollama_complete_missing_response_is_empty():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"done": True}))
    client = OllamaClient("http://ollama.local:11434", "llama3", transport=transport)
    assert client.complete("s", "u", max_tokens=10, temperature=0.7) == ""


def test_ollama_complete_raises_on_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "model not loaded"}))
    client = OllamaClient("http://ollama.local:11434", "llama3", transport=transport)
    with pytest.raises(httpx.HTTPStatusError):
        client.complete("s", "u", max_tokens=10, temperature=0.7)


# -----------------------
# OpenAI
# -----------------------
def test_openai_complete_uses_chat_completions():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "id": "chatcmpl-1",
                "object": "chat.completion",
                "created": 0,
                "model": "gpt-4o-mini",
                "choices": [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": " [1, 2] "},
                        "finish_reason": "stop",
                    }
                ],
            },
        )

    client = OpenAIChatClient(
        api_key="sk-test",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    text = client.complete("system text", "user text", max_tokens=1000, temperature=0.7)

    assert text == "[1, 2]"
    assert seen["path"].endswith("/chat/completions")
    assert seen["body"]["model"] == "gpt-4o-mini"
    assert seen["body"]["max_tokens"] == 1000
    assert seen["body"]["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "user text"},
    ]


def test_openai_client_requires_key():
    with pytest.raises(ValueError):
        OpenAIChatClient(api_key="")
