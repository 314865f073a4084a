"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

import main
from conftest import FakeClient, make_response, verdict_response, web_chunk
from forward_verifier.api import claim_api


@pytest.fixture
def api():
    """Yield a function that mounts a pipeline over scripted Gemini outcomes."""
    clients = []

    def mount(*outcomes):
        client = FakeClient(*outcomes)
        main.app.state.pipeline = main.build_pipeline(client)
        clients.append(TestClient(main.app))
        return clients[-1], client

    yield mount
    main.app.state.pipeline = None


def test_root():
    response = TestClient(main.app).get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_check_claim(api):
    http, _ = api(
        verdict_response(
            chunks=[web_chunk("https://www.nasa.gov/sun", "NASA")],
            verdict="False", confidence=99, explanation="Impossible.", category="Science",
        ),
        make_response("FALSE: the sun did not turn green."),
    )

    response = http.post("/api/claims/", json={"claim_text": "NASA confirmed the sun turned green"})

    assert response.status_code == 200
    body = response.json()
    assert body["verdict"] == "False"
    assert body["confidence"] == 99
    assert body["category"] == "Science"
    assert body["citations"] == [{"title": "NASA", "url": "https://www.nasa.gov/sun"}]
    assert body["summary"] == "FALSE: the sun did not turn green."
    assert "Verdict: FALSE" in body["share_text"]


def test_check_claim_blank_text(api):
    http, client = api()
    response = http.post("/api/claims/", json={"claim_text": "   "})
    assert response.status_code == 422
    assert client.calls == []


def test_malformed_response_maps_to_502(api):
    http, _ = api(make_response("Sorry, I cannot help with that."))
    response = http.post("/api/claims/", json={"claim_text": "some claim"})
    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "malformed_response"
    assert body["retryable"] is True


def test_unavailable_maps_to_503(api):
    http, _ = api(RuntimeError("connection reset"))
    response = http.post("/api/claims/", json={"claim_text": "some claim"})
    assert response.status_code == 503
    assert response.json()["error"] == "verification_unavailable"


def test_image_claim(api, png_bytes):
    http, _ = api(
        make_response("5G towers spread viruses"),
        verdict_response(verdict="False", confidence=99, explanation="Radio waves cannot carry viruses.", category="Medical"),
        make_response("FALSE: 5G does not spread viruses."),
    )

    response = http.post("/api/claims/image", files={"file": ("forward.png", png_bytes, "image/png")})

    assert response.status_code == 200
    body = response.json()
    assert body["verdict"] == "False"
    assert body["extracted_text"] == "5G towers spread viruses"


def test_image_without_text_maps_to_422(api, png_bytes):
    http, client = api(make_response(""))
    response = http.post("/api/claims/image", files={"file": ("blank.png", png_bytes, "image/png")})
    assert response.status_code == 422
    assert response.json()["error"] == "no_legible_text"
    assert len(client.calls) == 1


def test_oversized_upload_rejected(api, png_bytes, monkeypatch):
    monkeypatch.setattr(claim_api, "MAX_UPLOAD_BYTES", 4)
    http, client = api()
    response = http.post("/api/claims/image", files={"file": ("big.png", png_bytes, "image/png")})
    assert response.status_code == 413
    assert client.calls == []


def test_transcribe_endpoint(api, png_bytes):
    http, _ = api(make_response("Bank accounts will be frozen tomorrow"))
    response = http.post("/api/claims/transcribe", files={"file": ("shot.png", png_bytes, "image/png")})
    assert response.status_code == 200
    assert response.json() == {"text": "Bank accounts will be frozen tomorrow"}


def test_transcribe_failure_maps_to_502(api, png_bytes):
    http, _ = api(RuntimeError("quota"))
    response = http.post("/api/claims/transcribe", files={"file": ("shot.png", png_bytes, "image/png")})
    assert response.status_code == 502
    assert response.json()["error"] == "transcription_failed"


def test_summary_endpoint_never_fails(api):
    http, _ = api(RuntimeError("quota"))
    response = http.post("/api/claims/summary", json={"explanation": "x", "verdict": "True"})
    assert response.status_code == 200
    assert response.json() == {"summary": "Verification complete."}


def test_upload_at_limit_accepted(api, png_bytes, monkeypatch):
    monkeypatch.setattr(claim_api, "MAX_UPLOAD_BYTES", len(png_bytes))
    http, _ = api(make_response("Schools closed on Monday"))
    response = http.post("/api/claims/transcribe", files={"file": ("shot.png", png_bytes, "image/png")})
    assert response.status_code == 200
    assert response.json() == {"text": "Schools closed on Monday"}
