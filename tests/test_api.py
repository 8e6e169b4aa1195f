import pytest
from fastapi.testclient import TestClient

from api import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["skills"] > 0
    assert body["industry_profiles"] > 0


def test_analyze_text(client, sample_resume):
    response = client.post("/analyze", json={"text": sample_resume})

    assert response.status_code == 200
    body = response.json()
    assert 0 <= body["analysis"]["score"] <= 100
    assert "Python" in body["analysis"]["keywords"]
    assert body["job_match"] is None


def test_analyze_text_with_job_description(client, sample_resume):
    response = client.post(
        "/analyze",
        json={"text": sample_resume, "job_description": "Must have Python and Kubernetes", "non_text_elements": 1},
    )

    body = response.json()
    assert body["job_match"]["matchedSkills"] == ["Python"]
    assert body["job_match"]["missingSkills"] == ["Kubernetes"]


def test_analyze_rejects_empty_text(client):
    response = client.post("/analyze", json={"text": "   "})
    assert response.status_code == 422


def test_analyze_rejects_negative_non_text_elements(client, sample_resume):
    response = client.post("/analyze", json={"text": sample_resume, "non_text_elements": -1})
    assert response.status_code == 422


def test_match_job(client):
    response = client.post(
        "/match-job",
        json={"resume_skills": ["JS", "Docker"], "job_description": "JavaScript, Docker and AWS required"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["matchScore"] == 67
    assert body["summary"] == "2/3 required skills matched"


def test_upload_text_file(client, sample_resume):
    response = client.post(
        "/analyze/upload",
        files={"resume": ("resume.txt", sample_resume.encode("utf-8"), "text/plain")},
        data={"job_description": "Python developer"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["analysis"]["wordCount"] > 0
    assert body["job_match"]["matchScore"] == 100


def test_upload_rejects_unsupported_extension(client):
    response = client.post(
        "/analyze/upload",
        files={"resume": ("resume.exe", b"MZ...", "application/octet-stream")},
    )
    assert response.status_code == 400


def test_upload_rejects_empty_file(client):
    response = client.post("/analyze/upload", files={"resume": ("resume.txt", b"", "text/plain")})
    assert response.status_code == 400
