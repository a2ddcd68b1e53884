"""Tests for the aggregated job search and the JSearch client."""

import httpx
import pytest

from emploirapide.errors import InvalidCredentialError, RateLimitedError, UpstreamError
from emploirapide.tools.jsearch import JSearchClient

EXTERNAL_RECORD = {
    "job_id": "ext-123",
    "job_title": "Data Analyst",
    "employer_name": "Orange CI",
    "employer_logo": "https://logos.test/orange.png",
    "job_city": "Abidjan",
    "job_employment_type": "FULLTIME",
    "job_min_salary": 400000,
    "job_max_salary": 600000,
    "job_salary_currency": "XOF",
    "job_posted_at_datetime_utc": "2026-09-01T00:00:00.000Z",
    "job_description": "Analyse de données",
    "job_apply_link": "https://apply.test/ext-123",
    "job_highlights": {"Qualifications": ["SQL"], "Responsibilities": ["Reporting"]},
}


@pytest.fixture
def with_api_key(settings):
    settings.rapidapi_key = "test-key"
    return settings


class TestLocalSearch:
    def test_local_only(self, client, published_job, jsearch_responses):
        response = client.get("/jobs/search", params={"source": "local"})
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == body["local"] == 1
        assert body["external"] == 0
        job = body["jobs"][0]
        assert job["id"] == published_job["id"]
        assert job["isLocal"] is True
        assert job["applicationCount"] == 0
        assert jsearch_responses["requests"] == []

    def test_default_query_matches_everything(self, client, recruiter_headers, job_fields):
        client.post("/recruiter/jobs", json={**job_fields, "title": "Comptable"}, headers=recruiter_headers)
        client.post("/recruiter/jobs", json={**job_fields, "title": "Chauffeur"}, headers=recruiter_headers)

        body = client.get("/jobs/search", params={"query": "emploi", "source": "local"}).json()
        assert body["local"] == 2

        body = client.get("/jobs/search", params={"query": "chauffeur", "source": "local"}).json()
        assert [j["title"] for j in body["jobs"]] == ["Chauffeur"]

    def test_type_all_does_not_filter(self, client, published_job):
        body = client.get("/jobs/search", params={"type": "all", "source": "local"}).json()
        assert body["local"] == 1
        body = client.get("/jobs/search", params={"type": "Stage", "source": "local"}).json()
        assert body["local"] == 0

    def test_unknown_source_is_rejected(self, client):
        assert client.get("/jobs/search", params={"source": "partout"}).status_code == 422

    def test_external_skipped_without_key(self, client, published_job, jsearch_responses):
        body = client.get("/jobs/search").json()
        assert body["local"] == 1
        assert body["external"] == 0
        assert jsearch_responses["requests"] == []


class TestExternalSearch:
    def test_local_first_then_external(self, client, with_api_key, published_job, jsearch_responses):
        jsearch_responses["answers"].append((200, {"status": "OK", "data": [EXTERNAL_RECORD]}))

        response = client.get(
            "/jobs/search",
            params={"query": "data", "location": "Abidjan", "page": 2, "type": "fulltime"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["local"] == 0
        assert body["external"] == 1
        job = body["jobs"][0]
        assert job["id"] == "ext-123"
        assert job["isLocal"] is False
        assert job["salary"] == "400000 - 600000 XOF"
        assert job["postedAt"] == "01/09/2026"
        assert job["qualifications"] == ["SQL"]

        request = jsearch_responses["requests"][0]
        assert request.headers["X-RapidAPI-Key"] == "test-key"
        assert request.url.params["query"] == "data in Abidjan"
        assert request.url.params["page"] == "2"
        assert request.url.params["employment_types"] == "FULLTIME"

    def test_all_sources_merged(self, client, with_api_key, published_job, jsearch_responses):
        jsearch_responses["answers"].append((200, {"data": [EXTERNAL_RECORD]}))

        body = client.get("/jobs/search").json()
        assert body["total"] == 2
        assert [j["isLocal"] for j in body["jobs"]] == [True, False]
        assert "employment_types" not in jsearch_responses["requests"][0].url.params

    def test_rate_limited(self, client, with_api_key, jsearch_responses):
        jsearch_responses["answers"].append((429, {"message": "Too many requests"}))
        response = client.get("/jobs/search", params={"source": "external"})
        assert response.status_code == 429

    def test_invalid_key(self, client, with_api_key, jsearch_responses):
        jsearch_responses["answers"].append((401, {"message": "Invalid API key"}))
        response = client.get("/jobs/search", params={"source": "external"})
        assert response.status_code == 401

    def test_other_failure_carries_details(self, client, with_api_key, jsearch_responses):
        jsearch_responses["answers"].append((503, {"message": "Service unavailable"}))
        response = client.get("/jobs/search", params={"source": "external"})
        assert response.status_code == 503
        assert response.json()["details"] == {"message": "Service unavailable"}


class TestJSearchClient:
    def _client(self, settings, handler):
        settings.rapidapi_key = "test-key"
        return JSearchClient(settings, transport=httpx.MockTransport(handler))

    def test_missing_data_is_empty(self, settings):
        client = self._client(settings, lambda request: httpx.Response(200, json={"status": "OK"}))
        assert client.search("emploi", "Abidjan") == []

    def test_status_errors(self, settings):
        for status, error in ((429, RateLimitedError), (401, InvalidCredentialError), (500, UpstreamError)):
            client = self._client(settings, lambda request, s=status: httpx.Response(s, json={}))
            with pytest.raises(error):
                client.search("emploi", "Abidjan")

    def test_transport_failure(self, settings):
        def handler(request):
            raise httpx.ConnectError("connexion refusée", request=request)

        client = self._client(settings, handler)
        with pytest.raises(UpstreamError) as exc_info:
            client.search("emploi", "Abidjan")
        assert exc_info.value.status_code == 500

    def test_placeholder_key_disables_client(self, settings):
        settings.rapidapi_key = "your-rapidapi-key-here"
        assert JSearchClient(settings).enabled is False

    def test_non_json_body(self, settings):
        client = self._client(settings, lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        with pytest.raises(UpstreamError) as exc_info:
            client.search("emploi", "Abidjan")
        assert exc_info.value.status_code == 500

    def test_unexpected_payload_shape(self, settings):
        for payload in ([{"job_id": "x"}], {"data": "aucune offre"}):
            client = self._client(settings, lambda request, p=payload: httpx.Response(200, json=p))
            with pytest.raises(UpstreamError):
                client.search("emploi", "Abidjan")
