"""Tests for API endpoints (engine integration through the HTTP layer)."""

from __future__ import annotations

from tests.conftest import TRADITIONAL_ROSE_PROMPT


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["stages_registered"] == 6
    assert data["tables_version"] == "2024.12.1"


def test_analyze(client):
    response = client.post("/api/analyze", json={
        "prompt": "intricate black and gray wolf portrait",
        "subject": "wolf",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["complexity"] == "complex"
    assert data["color_requirement"] == "black_and_gray"
    assert data["subject"] == "wolf"
    assert "intricate" in data["keywords"]


def test_enhance_rose(client):
    response = client.post("/api/enhance", json={
        "prompt": "rose",
        "style": "traditional",
        "technique": "line_work",
    })
    assert response.status_code == 200
    data = response.json()
    assert len(data["stages_applied"]) == 6
    assert "tattoo" in data["enhanced_prompt"].lower()
    assert data["confidence_score"] >= 80


def test_enhance_empty_prompt(client):
    response = client.post("/api/enhance", json={"prompt": "  "})
    assert response.status_code == 200
    assert response.json()["warnings"] == ["Empty prompt provided"]


def test_enhance_unknown_stage_override(client):
    response = client.post("/api/enhance", json={
        "prompt": "rose",
        "stages_enabled": {"no_such_stage": False},
    })
    assert response.status_code == 422
    assert "no_such_stage" in response.json()["detail"]


def test_enhance_disabled_stage(client):
    response = client.post("/api/enhance", json={
        "prompt": "rose",
        "style": "traditional",
        "stages_enabled": {"quality_enhancement": False},
    })
    assert response.status_code == 200
    assert "quality_enhancement" not in response.json()["stages_applied"]


def test_enhance_records_history(client):
    client.post("/api/enhance", json={"prompt": "rose", "style": "traditional", "user_id": "u1"})

    response = client.get("/api/history/u1")
    assert response.status_code == 200
    records = response.json()["records"]
    assert len(records) == 1
    assert records[0]["kind"] == "pipeline"
    assert records[0]["original_prompt"] == "rose"
    assert records[0]["backend"] == "balanced-tier"


def test_anonymous_enhance_not_recorded(client):
    client.post("/api/enhance", json={"prompt": "rose"})
    assert client.get("/api/history/u1").json()["records"] == []


def test_transfer(client):
    response = client.post("/api/transfer", json={
        "original_prompt": TRADITIONAL_ROSE_PROMPT,
        "original_style": "traditional",
        "target_style": "realistic",
        "user_id": "u2",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["confidence"] == 76
    assert data["compatibility_score"] == 85
    assert data["preserved_elements"][0] == "rose"

    history = client.get("/api/history/u2", params={"kind": "transfer"}).json()
    assert history["records"][0]["applied"] == ["traditional->realistic"]


def test_transfer_same_style_rejected(client):
    response = client.post("/api/transfer", json={
        "original_prompt": "rose",
        "original_style": "traditional",
        "target_style": "Traditional",
    })
    assert response.status_code == 422
    assert response.json()["detail"] == "Source and target styles cannot be the same"


def test_transfer_rules(client):
    rows = client.get("/api/transfer/rules").json()
    assert len(rows) == 10
    assert rows[0]["compatibility"] == 90


def test_transfer_preview_unsupported(client):
    response = client.get("/api/transfer/preview", params={
        "from_style": "realistic",
        "to_style": "tribal",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["compatibility"] == 0
    assert data["warnings"] == ["Style transfer not supported between these styles"]


def test_recommend_portrait(client):
    response = client.post("/api/recommend", json={
        "prompt": "intricate realistic portrait of grandmother",
        "style": "realistic",
        "subject": "portrait of grandmother",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["backend"] == "realism-tier"
    assert "Excellent for portrait work" in data["reasoning"]
    assert "realism-tier" not in data["alternatives"]


def test_recommend_respects_avoid_list(client):
    response = client.post("/api/recommend", json={
        "prompt": "intricate realistic portrait of grandmother",
        "subject": "portrait of grandmother",
        "preferences": {"avoid_backends": ["realism-tier"]},
    })
    assert response.json()["backend"] != "realism-tier"


def test_backends(client):
    rows = client.get("/api/backends").json()
    assert [r["backend"] for r in rows] == [
        "realism-tier",
        "balanced-tier",
        "artistic-tier",
        "typography-tier",
        "experimental-tier",
    ]
    assert "traits" not in rows[0]


def test_backend_detail(client):
    assert client.get("/api/backends/typography-tier").json()["max_prompt_length"] == 500
    assert client.get("/api/backends/nope").status_code == 404


def test_quality(client):
    response = client.post("/api/quality", json={"prompt": "rose"})
    assert response.status_code == 200
    assert response.json()["score"] == 50


def test_style_templates(client):
    templates = client.get("/api/styles/templates").json()
    assert len(templates) == 10
    assert len(templates["japanese"]) == 3


def test_style_suggestions(client):
    response = client.post("/api/styles/suggestions", json={"partial_prompt": "koi", "count": 2})
    assert len(response.json()["suggestions"]) == 2

    response = client.post("/api/styles/suggestions", json={"partial_prompt": "koi", "count": 50})
    assert response.status_code == 422


def test_performance(client):
    assert client.get("/api/history/u3/performance").json()["improvement_suggestions"] == [
        "No enhancement history yet"
    ]

    for prompt in ("rose", "koi"):
        client.post("/api/enhance", json={"prompt": prompt, "style": "japanese", "user_id": "u3"})

    data = client.get("/api/history/u3/performance").json()
    assert data["average_confidence"] > 0
    assert len(data["most_effective_stages"]) == 3
