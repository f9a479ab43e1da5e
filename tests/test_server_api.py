from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import shogun_slogans.server as server
from shogun_slogans.context import build_context, get_context
from shogun_slogans.services.css_cache import MemoryCacheStore
from shogun_slogans.utils.config import Settings

API = "/shogun-slogans/v1"


def _client(**settings_overrides):
    ctx = build_context(Settings(cache_backend="memory", **settings_overrides), store=MemoryCacheStore())
    server.app.dependency_overrides[get_context] = lambda: ctx
    return TestClient(server.app), ctx


@pytest.fixture(autouse=True)
def _clear_overrides():
    yield
    server.app.dependency_overrides.clear()


def test_health():
    client, _ = _client()
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["animations"] == 3


def test_list_animations():
    client, _ = _client()
    body = client.get(f"{API}/animations").json()
    assert body["total"] == 3
    assert [a["name"] for a in body["animations"]] == ["typewriter", "handwritten", "neon"]
    assert body["categories"]["text"] == "Text Effects"
    neon = body["animations"][2]
    assert neon["category"] == "visual"
    assert neon["parameters"]["intensity"] == {
        "type": "int",
        "default": 20,
        "min": 5,
        "max": 50,
        "label": "Glow Intensity",
        "description": "Intensity of the glow effect",
    }


def test_animation_detail_and_not_found():
    client, _ = _client()
    resp = client.get(f"{API}/animations/neon")
    assert resp.status_code == 200
    assert resp.json()["js_init"] == "ShogunAPI.initNeon"

    missing = client.get(f"{API}/animations/sparkle")
    assert missing.status_code == 404
    assert missing.json() == {"error": "animation_not_found", "message": 'Animation type "sparkle" not found.'}


def test_generate_css_uses_cache():
    client, _ = _client()
    payload = {"animation": "neon", "parameters": {"intensity": 999, "flicker": True}}
    first = client.post(f"{API}/generate-css", json=payload).json()
    second = client.post(f"{API}/generate-css", json=payload).json()
    assert first["cached"] is False
    assert second["cached"] is True
    assert first["css"] == second["css"]
    assert "--glow-intensity: 50px" in first["css"]
    assert first["unique_id"] == first["cache_key"][:8]
    assert first["selector"] == f".shogun-neon-{first['unique_id']}"
    assert first["js_init"] == "ShogunAPI.initNeon"


def test_generate_css_custom_selector_is_sanitized():
    client, _ = _client()
    resp = client.post(
        f"{API}/generate-css",
        json={"animation": "neon", "parameters": {}, "selector": ".hero { } ; x", "use_cache": False},
    )
    body = resp.json()
    assert body["selector"] == ".hero x"
    assert body["css"].startswith(".hero x{")


def test_generate_css_unknown_animation():
    client, _ = _client()
    resp = client.post(f"{API}/generate-css", json={"animation": "sparkle"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "animation_not_found"


def test_generate_css_empty_output_is_500(monkeypatch):
    client, ctx = _client()
    monkeypatch.setattr(ctx.generator, "generate_animation_css", lambda *args, **kwargs: "")
    resp = client.post(f"{API}/generate-css", json={"animation": "neon", "use_cache": False})
    assert resp.status_code == 500
    assert resp.json()["error"] == "css_generation_failed"


def test_css_endpoint_serves_stylesheet():
    client, _ = _client()
    resp = client.get(f"{API}/css/neon", params={"intensity": "999", "flicker": "1"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/css")
    assert resp.headers["cache-control"] == "public, max-age=3600"
    assert "--glow-intensity: 50px" in resp.text
    assert "@keyframes shogun-neon-flicker-" in resp.text


def test_css_endpoint_unknown_animation():
    client, _ = _client()
    assert client.get(f"{API}/css/sparkle").status_code == 404


def test_preview_is_not_cached():
    client, ctx = _client()
    resp = client.post(f"{API}/preview", json={"animation": "typewriter", "text": "Hi!", "parameters": {"speed": 5}})
    body = resp.json()
    assert resp.status_code == 200
    assert body["parameters"]["speed"] == 10
    assert "Hi!" in body["html"]
    assert "steps(3,end)" in body["css"]
    assert len(ctx.cache.store) == 0


def test_editor_token_required_when_configured():
    client, _ = _client(editor_token="ed-secret", admin_token="ad-secret")
    payload = {"animation": "typewriter"}
    assert client.post(f"{API}/generate-css", json=payload).status_code == 401
    assert client.post(f"{API}/generate-css", json=payload, headers={"Authorization": "Token ed-secret"}).status_code == 401
    assert client.post(f"{API}/generate-css", json=payload, headers={"Authorization": "Bearer nope"}).status_code == 401
    assert client.post(f"{API}/generate-css", json=payload, headers={"Authorization": "Bearer ed-secret"}).status_code == 200
    assert client.post(f"{API}/preview", json=payload, headers={"Authorization": "Bearer ad-secret"}).status_code == 200


def test_read_endpoints_stay_public():
    client, _ = _client(editor_token="ed-secret", admin_token="ad-secret")
    assert client.get(f"{API}/animations").status_code == 200
    assert client.get(f"{API}/css/typewriter").status_code == 200


def test_cache_clear_requires_admin():
    client, ctx = _client(editor_token="ed-secret", admin_token="ad-secret")
    result = ctx.service.compile_css("neon", {})
    url = f"{API}/cache/clear"

    assert client.post(url, json={}).status_code == 401
    assert client.post(url, json={}, headers={"Authorization": "Bearer ed-secret"}).status_code == 403

    resp = client.post(url, json={"cache_key": result.cache_key}, headers={"Authorization": "Bearer ad-secret"})
    assert resp.json() == {"success": True, "message": "Specific cache cleared"}
    assert ctx.cache.get(result.cache_key) is None


def test_cache_clear_without_body_clears_everything():
    client, ctx = _client()
    ctx.service.compile_css("typewriter", {})
    resp = client.post(f"{API}/cache/clear")
    assert resp.json() == {"success": True, "message": "All cache cleared"}
    assert len(ctx.cache.store) == 0


def test_generate_css_tolerates_non_finite_and_oversized_numbers():
    client, _ = _client()
    resp = client.post(
        f"{API}/generate-css",
        content='{"animation": "neon", "parameters": {"intensity": Infinity}, "use_cache": false}',
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 200
    assert "--glow-intensity: 20px" in resp.json()["css"]

    resp = client.post(
        f"{API}/generate-css",
        content='{"animation": "neon", "parameters": {"intensity": NaN}, "use_cache": false}',
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 200

    resp = client.post(f"{API}/generate-css", json={"animation": "neon", "parameters": {"intensity": "9" * 5000}})
    assert resp.status_code == 200
    assert "--glow-intensity: 50px" in resp.json()["css"]


def test_css_endpoint_tolerates_oversized_numbers():
    client, _ = _client()
    resp = client.get(f"{API}/css/neon", params={"intensity": "9" * 5000})
    assert resp.status_code == 200
    assert "--glow-intensity: 50px" in resp.text
