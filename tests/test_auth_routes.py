from urllib.parse import parse_qs, urlsplit

import pytest

from routes.auth import build_auth_url

TOKEN_BODY = {
    "code": "abc123",
    "app_id": "42",
    "app_secret": "s3cret",
    "redirect_uri": "https://example.com/cb?x=1",
}


def test_auth_url_layout():
    url = build_auth_url("42", "https://example.com/cb?x=1&y=2")

    assert url == (
        "https://www.facebook.com/v18.0/dialog/oauth?client_id=42"
        "&redirect_uri=https%3A%2F%2Fexample.com%2Fcb%3Fx%3D1%26y%3D2"
        "&scope=instagram_basic,pages_show_list,pages_read_engagement"
        "&response_type=code"
    )


def test_auth_endpoint(api):
    r = api.get("/api/auth/instagram", params={"app_id": "42", "redirect_uri": "https://example.com/cb"})

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert len(body["instructions"]) == 3
    qs = parse_qs(urlsplit(body["auth_url"]).query)
    assert qs["client_id"] == ["42"]
    assert qs["redirect_uri"] == ["https://example.com/cb"]
    assert qs["response_type"] == ["code"]


@pytest.mark.parametrize("params", [{}, {"app_id": "42"}, {"redirect_uri": "https://example.com/cb"}])
def test_auth_endpoint_requires_both_params(api, params):
    r = api.get("/api/auth/instagram", params=params)

    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "app_id and redirect_uri are required"}


def test_token_exchange(api, graph):
    graph.responses["graph.facebook.com/v18.0/oauth/access_token"] = {
        "access_token": "user-token",
        "token_type": "bearer",
        "expires_in": 5183944,
    }

    r = api.post("/api/auth/token", json=TOKEN_BODY)

    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "access_token": "user-token",
        "token_type": "bearer",
        "expires_in": 5183944,
    }
    assert len(graph.calls) == 1
    params = graph.calls[0].url.params
    assert graph.calls[0].method == "GET"
    assert params["client_id"] == "42"
    assert params["client_secret"] == "s3cret"
    assert params["code"] == "abc123"
    assert params["redirect_uri"] == "https://example.com/cb?x=1"


@pytest.mark.parametrize("missing", ["code", "app_id", "app_secret", "redirect_uri"])
def test_token_exchange_missing_field_is_400_before_upstream(api, graph, missing):
    body = {k: v for k, v in TOKEN_BODY.items() if k != missing}

    r = api.post("/api/auth/token", json=body)

    assert r.status_code == 400
    assert r.json() == {
        "success": False,
        "error": "code, app_id, app_secret, and redirect_uri are required",
    }
    assert graph.calls == []


def test_token_exchange_without_body(api, graph):
    r = api.post("/api/auth/token")

    assert r.status_code == 400
    assert graph.calls == []


def test_token_exchange_failure_is_500(api, graph):
    graph.responses["graph.facebook.com/v18.0/oauth/access_token"] = (
        400,
        {"error": {"message": "This authorization code has expired."}},
    )

    r = api.post("/api/auth/token", json=TOKEN_BODY)

    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Failed to exchange code for token"}
