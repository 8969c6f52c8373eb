from __future__ import annotations

from fastapi.testclient import TestClient

import htmltex.main as main_mod
from htmltex.main import app
from htmltex.web_tools import FetchResult, WebToolError

client = TestClient(app)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "name": "htmltex", "version": "0.1.0"}


def test_convert_html():
    r = client.post("/convert", json={"html": '<p style="font-weight: 700">Up 5%</p>'})
    assert r.status_code == 200
    data = r.json()
    assert data["latex"] == "\n\n\\textbf{Up 5\\%}"
    assert data["bytes"] == len(data["latex"].encode("utf-8"))
    assert "source_url" not in data


def test_convert_requires_exactly_one_source():
    assert client.post("/convert", json={}).status_code == 422
    r = client.post("/convert", json={"html": "<p>x</p>", "url": "https://example.com"})
    assert r.status_code == 422


def test_convert_url(monkeypatch):
    async def fake_fetch(url: str) -> FetchResult:
        return FetchResult(
            url=url,
            final_url=url,
            status=200,
            content_type="text/html",
            html="<p>10-20</p>",
            bytes=12,
            truncated=False,
        )

    monkeypatch.setattr(main_mod, "fetch_html", fake_fetch)
    r = client.post("/convert", json={"url": "https://example.com/page"})
    assert r.status_code == 200
    assert r.json()["latex"] == "\n\n10--20"
    assert r.json()["source_url"] == "https://example.com/page"


def test_convert_url_fetch_failure(monkeypatch):
    async def failing_fetch(url: str) -> FetchResult:
        raise WebToolError("Fetch failed (404): not found")

    monkeypatch.setattr(main_mod, "fetch_html", failing_fetch)
    r = client.post("/convert", json={"url": "https://example.com/missing"})
    assert r.status_code == 502
    assert "404" in r.json()["detail"]
