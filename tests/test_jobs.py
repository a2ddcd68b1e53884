"""Tests for the job listing store."""

from emploirapide.db import Application, Job
from tests.conftest import auth_headers


class TestCreateJob:
    def test_create_defaults_to_active_and_is_listed(self, client, recruiter_headers, job_fields):
        response = client.post("/recruiter/jobs", json=job_fields, headers=recruiter_headers)
        assert response.status_code == 200
        job = response.json()["job"]
        assert job["id"]
        assert job["status"] == "active"
        assert job["keywords"] == []

        published = client.get("/jobs/published").json()
        assert [j["id"] for j in published["jobs"]] == [job["id"]]
        assert published["jobs"][0]["recruiter"]["companyName"] == "Acme CI"

    def test_missing_required_field(self, client, recruiter_headers, job_fields, db):
        job_fields["title"] = "  "
        response = client.post("/recruiter/jobs", json=job_fields, headers=recruiter_headers)
        assert response.status_code == 400
        assert "title" in response.json()["detail"]
        assert db.query(Job).count() == 0

    def test_salary_strings_and_keywords(self, client, recruiter_headers, job_fields):
        job_fields.update(salary_min="500000", salary_max=800000, keywords=["python", "django"])
        job = client.post("/recruiter/jobs", json=job_fields, headers=recruiter_headers).json()["job"]
        assert job["salary_min"] == 500000
        assert job["salary"] == "500,000 - 800,000 FCFA"
        assert job["keywords"] == ["python", "django"]

    def test_invalid_salary(self, client, recruiter_headers, job_fields):
        job_fields["salary_min"] = "beaucoup"
        response = client.post("/recruiter/jobs", json=job_fields, headers=recruiter_headers)
        assert response.status_code == 400

    def test_candidate_cannot_create(self, client, candidate_headers, job_fields):
        response = client.post("/recruiter/jobs", json=job_fields, headers=candidate_headers)
        assert response.status_code == 403


class TestPublicListing:
    def test_only_active_jobs(self, client, recruiter_headers, job_fields):
        for status in ("active", "paused", "closed"):
            client.post("/recruiter/jobs", json={**job_fields, "title": status, "status": status}, headers=recruiter_headers)

        jobs = client.get("/jobs/published").json()["jobs"]
        assert [j["title"] for j in jobs] == ["active"]

    def test_filters_and_order(self, client, recruiter_headers, job_fields):
        client.post("/recruiter/jobs", json={**job_fields, "title": "Comptable"}, headers=recruiter_headers)
        client.post(
            "/recruiter/jobs",
            json={**job_fields, "title": "Stagiaire marketing", "contract_type": "Stage"},
            headers=recruiter_headers,
        )
        client.post("/recruiter/jobs", json={**job_fields, "title": "Développeur Python"}, headers=recruiter_headers)

        titles = [j["title"] for j in client.get("/jobs/published").json()["jobs"]]
        assert titles == ["Développeur Python", "Stagiaire marketing", "Comptable"]

        by_query = client.get("/jobs/published", params={"query": "COMPTA"}).json()["jobs"]
        assert [j["title"] for j in by_query] == ["Comptable"]

        by_contract = client.get("/jobs/published", params={"contractType": "Stage"}).json()["jobs"]
        assert [j["title"] for j in by_contract] == ["Stagiaire marketing"]

        limited = client.get("/jobs/published", params={"limit": 2}).json()
        assert limited["total"] == 2

    def test_wildcards_are_literal(self, client, published_job):
        assert client.get("/jobs/published", params={"query": "%"}).json()["jobs"] == []


class TestGetJob:
    def test_get_is_idempotent(self, client, published_job):
        first = client.get(f"/jobs/{published_job['id']}")
        second = client.get(f"/jobs/{published_job['id']}")
        assert first.status_code == 200
        assert first.json() == second.json()
        job = first.json()["job"]
        assert job["applicationsCount"] == 0
        assert job["salary"] == "Salaire non spécifié"
        assert job["recruiter"]["name"] == "Awa Koné"

    def test_unknown_job(self, client):
        response = client.get("/jobs/inexistant")
        assert response.status_code == 404


class TestOwnership:
    def test_owner_updates_partially(self, client, recruiter_headers, published_job):
        response = client.patch(
            f"/recruiter/jobs/{published_job['id']}",
            json={"status": "paused", "keywords": ["sql"]},
            headers=recruiter_headers,
        )
        assert response.status_code == 200
        job = response.json()["job"]
        assert job["status"] == "paused"
        assert job["keywords"] == ["sql"]
        assert job["title"] == published_job["title"]

    def test_invalid_status(self, client, recruiter_headers, published_job):
        response = client.patch(
            f"/recruiter/jobs/{published_job['id']}", json={"status": "archived"}, headers=recruiter_headers
        )
        assert response.status_code == 400

    def test_other_recruiter_cannot_update_or_delete(self, client, db, other_recruiter, settings, published_job):
        headers = auth_headers(other_recruiter, settings)

        response = client.patch(f"/recruiter/jobs/{published_job['id']}", json={"title": "Piraté"}, headers=headers)
        assert response.status_code == 404
        response = client.delete(f"/recruiter/jobs/{published_job['id']}", headers=headers)
        assert response.status_code == 404

        assert db.query(Job).filter(Job.id == published_job["id"], Job.title == published_job["title"]).count() == 1

    def test_listing_is_per_recruiter(self, client, recruiter_headers, other_recruiter, settings, published_job):
        mine = client.get("/recruiter/jobs", headers=recruiter_headers).json()["jobs"]
        theirs = client.get("/recruiter/jobs", headers=auth_headers(other_recruiter, settings)).json()["jobs"]
        assert [j["id"] for j in mine] == [published_job["id"]]
        assert mine[0]["applicationsCount"] == 0
        assert theirs == []

    def test_delete_cascades_to_applications(
        self, client, db, recruiter_headers, candidate_headers, published_job
    ):
        client.post("/applications", json={"jobId": published_job["id"]}, headers=candidate_headers)
        client.post(
            "/saved-jobs",
            json={"jobId": published_job["id"], "jobData": {"title": published_job["title"]}},
            headers=candidate_headers,
        )

        response = client.delete(f"/recruiter/jobs/{published_job['id']}", headers=recruiter_headers)
        assert response.status_code == 200
        assert db.query(Job).count() == 0
        assert db.query(Application).count() == 0

        # Bookmarks keep their snapshot
        saved = client.get("/saved-jobs", headers=candidate_headers).json()["jobs"]
        assert saved[0]["title"] == published_job["title"]


class TestAccentedSearch:
    def test_query_folds_accented_capitals(self, client, recruiter_headers, job_fields):
        client.post("/recruiter/jobs", json={**job_fields, "title": "ÉLECTRICIEN"}, headers=recruiter_headers)

        published = client.get("/jobs/published", params={"query": "électricien"}).json()["jobs"]
        assert [j["title"] for j in published] == ["ÉLECTRICIEN"]

        found = client.get("/jobs/search", params={"query": "électricien", "source": "local"}).json()
        assert found["local"] == 1
