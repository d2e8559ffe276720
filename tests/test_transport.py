# tests/test_transport.py
"""Tests for the HTTP transport against a local aiohttp server."""
import json

import pytest
from aiohttp import web
from aiohttp import test_utils

from toli.components.ai.backends import OllamaBackend, OpenAIBackend
from toli.components.ai.errors import FormatError, TransportError
from toli.components.ai.models import Command
from toli.components.ai.transport import HttpTransport


def _app(path, handler):
    app = web.Application()
    app.router.add_post(path, handler)
    return app


@pytest.mark.asyncio
async def test_post_json_returns_decoded_object():
    async def handler(request):
        body = await request.json()
        return web.json_response({"echo": body["model"]})

    transport = HttpTransport()
    async with test_utils.TestServer(_app("/echo", handler)) as server:
        try:
            data = await transport.post_json(str(server.make_url("/echo")), {"model": "m"})
        finally:
            await transport.close()

    assert data == {"echo": "m"}


@pytest.mark.asyncio
async def test_error_status_is_transport_error():
    async def handler(request):
        return web.Response(status=500, text="boom")

    transport = HttpTransport()
    async with test_utils.TestServer(_app("/fail", handler)) as server:
        try:
            with pytest.raises(TransportError) as excinfo:
                await transport.post_json(str(server.make_url("/fail")), {})
        finally:
            await transport.close()

    assert excinfo.value.status == 500
    assert "boom" in str(excinfo.value)


@pytest.mark.asyncio
async def test_non_json_body_is_format_error():
    async def handler(request):
        return web.Response(text="<html>gateway</html>")

    transport = HttpTransport()
    async with test_utils.TestServer(_app("/html", handler)) as server:
        try:
            with pytest.raises(FormatError) as excinfo:
                await transport.post_json(str(server.make_url("/html")), {})
        finally:
            await transport.close()

    assert excinfo.value.raw == "<html>gateway</html>"


@pytest.mark.asyncio
async def test_connection_refused_is_transport_error():
    transport = HttpTransport(timeout=5)
    try:
        with pytest.raises(TransportError) as excinfo:
            await transport.post_json("http://127.0.0.1:1/api/generate", {})
    finally:
        await transport.close()

    assert excinfo.value.status is None


@pytest.mark.asyncio
async def test_ollama_backend_over_http():
    received = []

    async def handler(request):
        body = await request.json()
        received.append(body)
        reply = [{"command": "find . -name '*.pdf'", "explanation": "pdfs", "confidence": 0.95}]
        return web.json_response({"model": body["model"], "response": json.dumps(reply), "done": True})

    async with test_utils.TestServer(_app("/api/generate", handler)) as server:
        backend = OllamaBackend(str(server.make_url("")), model="llama3.2")
        async with backend:
            result = await backend.translate_to_command("list pdf files", "zsh")

    assert isinstance(result[0], Command)
    assert received[0]["stream"] is False
    assert received[0]["model"] == "llama3.2"


@pytest.mark.asyncio
async def test_openai_backend_sends_bearer_token():
    headers = []

    async def handler(request):
        headers.append(request.headers.get("Authorization"))
        return web.json_response({"choices": [{"message": {"role": "assistant", "content": "Prints the directory."}}]})

    async with test_utils.TestServer(_app("/v1/chat/completions", handler)) as server:
        backend = OpenAIBackend("sk-secret", base_url=str(server.make_url("/v1")))
        async with backend:
            result = await backend.explain_command("pwd", "")

    assert headers == ["Bearer sk-secret"]
    assert result.option.explanation == "Prints the directory."
