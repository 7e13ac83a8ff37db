from __future__ import annotations

import httpx
import pytest

from extreme_search.config import settings
from extreme_search.exceptions import ConfigurationError, ProviderError
from extreme_search.models.research import SearchCategory
from extreme_search.tools import exa_search


class _FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("POST", "https://api.exa.ai")
            raise httpx.HTTPStatusError(
                "error", request=request, response=httpx.Response(self.status_code, request=request)
            )

    def json(self):
        return self._payload


@pytest.fixture
def exa_key(monkeypatch):
    monkeypatch.delenv("SSLKEYLOGFILE", raising=False)
    monkeypatch.setattr(settings, "exa_api_key", "exa-test-key")
    monkeypatch.setattr(settings, "exa_base_url", "https://api.exa.ai")


@pytest.mark.asyncio
async def test_search_sends_category_and_domains(monkeypatch, exa_key):
    monkeypatch.setattr(settings, "content_max_chars", 1200)
    captured: dict = {}

    async def fake_post(self, url: str, **kwargs):  # noqa: ARG001
        captured["url"] = url
        captured.update(kwargs)
        return _FakeResponse(
            {
                "results": [
                    {
                        "title": "Paper",
                        "url": "https://arxiv.org/abs/1",
                        "text": "abstract",
                        "publishedDate": "2024-05-01",
                        "favicon": "https://arxiv.org/favicon.ico",
                    },
                    {"title": "No url"},
                ]
            }
        )

    monkeypatch.setattr(httpx.AsyncClient, "post", fake_post)

    results = await exa_search.search(
        "transformer scaling laws",
        num_results=5,
        category=SearchCategory.RESEARCH_PAPER,
        include_domains=["arxiv.org"],
    )

    assert captured["url"] == "https://api.exa.ai/search"
    assert captured["headers"]["x-api-key"] == "exa-test-key"
    payload = captured["json"]
    assert payload["category"] == "research paper"
    assert payload["includeDomains"] == ["arxiv.org"]
    assert payload["numResults"] == 5
    assert payload["contents"] == {"text": {"maxCharacters": 1200}}
    assert len(results) == 1
    assert results[0].content == "abstract"
    assert results[0].published_date == "2024-05-01"


@pytest.mark.asyncio
async def test_search_omits_optional_filters(monkeypatch, exa_key):
    captured: dict = {}

    async def fake_post(self, url: str, **kwargs):  # noqa: ARG001
        captured.update(kwargs)
        return _FakeResponse({"results": []})

    monkeypatch.setattr(httpx.AsyncClient, "post", fake_post)

    assert await exa_search.search("q") == []
    assert "category" not in captured["json"]
    assert "includeDomains" not in captured["json"]


@pytest.mark.asyncio
async def test_get_contents_requests_capped_text(monkeypatch, exa_key):
    captured: dict = {}

    async def fake_post(self, url: str, **kwargs):  # noqa: ARG001
        captured["url"] = url
        captured.update(kwargs)
        return _FakeResponse({"results": [{"url": "https://a.example.com", "text": "t"}, "junk"]})

    monkeypatch.setattr(httpx.AsyncClient, "post", fake_post)

    raw = await exa_search.get_contents(["https://a.example.com"], max_characters=3000)

    assert captured["url"] == "https://api.exa.ai/contents"
    assert captured["json"]["text"] == {"maxCharacters": 3000, "includeHtmlTags": False}
    assert captured["json"]["livecrawl"] == "preferred"
    assert raw == [{"url": "https://a.example.com", "text": "t"}]


@pytest.mark.asyncio
async def test_missing_key_raises_configuration_error(monkeypatch):
    monkeypatch.setattr(settings, "exa_api_key", "")

    with pytest.raises(ConfigurationError):
        await exa_search.search("q")


@pytest.mark.asyncio
async def test_http_error_propagates(monkeypatch, exa_key):
    async def fake_post(self, url: str, **kwargs):  # noqa: ARG001
        return _FakeResponse({}, status_code=503)

    monkeypatch.setattr(httpx.AsyncClient, "post", fake_post)

    with pytest.raises(httpx.HTTPStatusError):
        await exa_search.get_contents(["https://a.example.com"], max_characters=100)


@pytest.mark.asyncio
async def test_non_object_body_is_provider_error(monkeypatch, exa_key):
    async def fake_post(self, url: str, **kwargs):  # noqa: ARG001
        return _FakeResponse(["not", "an", "object"])

    monkeypatch.setattr(httpx.AsyncClient, "post", fake_post)

    with pytest.raises(ProviderError):
        await exa_search.search("q")
