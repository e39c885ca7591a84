"""
HTTP-level tests for the blueprints.
"""

import pytest

from cvision.models import Application, Job


def analysis_payload(similarity=0.75, **overrides):
    data = {
        "similarity": similarity,
        "reason": "Good fit",
        "yearsOfExperience": 3,
        "skills": "Python, Flask",
    }
    data.update(overrides)
    return data


class TestAuthRoutes:
    def test_register_then_login(self, client):
        response = client.post("/api/auth/register", json={
            "name": "Ana", "email": "ana@example.com", "password": "secret", "role": "applicant",
        })
        assert response.status_code == 201
        assert "access_token" in response.get_json()

        response = client.post("/api/auth/login", json={
            "email": "ana@example.com", "password": "secret", "role": "applicant",
        })
        assert response.status_code == 200
        assert response.get_json()["access_token"]

    def test_duplicate_email_conflict(self, client, make_user):
        make_user(email="taken@example.com")

        response = client.post("/api/auth/register", json={
            "name": "Ana", "email": "taken@example.com", "password": "secret", "role": "applicant",
        })

        assert response.status_code == 409

    def test_wrong_password(self, client, make_user):
        make_user(email="ana@example.com", password="right")

        response = client.post("/api/auth/login", json={
            "email": "ana@example.com", "password": "wrong", "role": "applicant",
        })

        assert response.status_code == 401
        assert response.get_json()["error"] == "Invalid email or password"

    def test_role_mismatch(self, client, make_user):
        make_user(email="ana@example.com", password="pw", role="applicant")

        response = client.post("/api/auth/login", json={
            "email": "ana@example.com", "password": "pw", "role": "recruiter",
        })

        assert response.status_code == 401

    def test_missing_fields(self, client):
        response = client.post("/api/auth/login", json={"email": "ana@example.com"})

        assert response.status_code == 400


class TestJobRoutes:
    def test_recruiter_creates_job(self, client, recruiter, auth_headers):
        response = client.post("/api/recruiter/jobs", headers=auth_headers(recruiter), json={
            "title": "Backend Engineer", "company": "DataSys", "shortlist_size": 3,
        })

        assert response.status_code == 201
        job = response.get_json()["job"]
        assert job["shortlist_size"] == 3
        assert job["recruiter_id"] == recruiter.id

    def test_default_shortlist_size(self, client, recruiter, auth_headers):
        response = client.post("/api/recruiter/jobs", headers=auth_headers(recruiter), json={"title": "Dev"})

        assert response.get_json()["job"]["shortlist_size"] == 5

    @pytest.mark.parametrize("size", [0, -2, "abc", True])
    def test_rejects_bad_shortlist_size(self, client, recruiter, auth_headers, size):
        response = client.post("/api/recruiter/jobs", headers=auth_headers(recruiter), json={
            "title": "Dev", "shortlist_size": size,
        })

        assert response.status_code == 400

    def test_applicant_cannot_create_job(self, client, make_user, auth_headers):
        response = client.post("/api/recruiter/jobs", headers=auth_headers(make_user()), json={"title": "Dev"})

        assert response.status_code == 403

    def test_anonymous_cannot_create_job(self, client):
        response = client.post("/api/recruiter/jobs", json={"title": "Dev"})

        assert response.status_code == 401

    def test_update_job_owner_only(self, client, make_job, make_user, auth_headers, recruiter):
        job = make_job()
        other = make_user(role="recruiter")

        denied = client.patch(f"/api/recruiter/jobs/{job.id}", headers=auth_headers(other), json={"shortlist_size": 1})
        allowed = client.patch(f"/api/recruiter/jobs/{job.id}", headers=auth_headers(recruiter), json={
            "shortlist_size": 1, "is_active": False,
        })

        assert denied.status_code == 403
        assert allowed.status_code == 200
        assert allowed.get_json()["job"]["shortlist_size"] == 1
        assert allowed.get_json()["job"]["is_active"] is False

    def test_my_jobs_with_counts(self, client, recruiter, make_job, make_application, auth_headers):
        job = make_job()
        make_job(title="Empty")
        make_application(job)
        make_application(job)

        response = client.get("/api/recruiter/jobs", headers=auth_headers(recruiter))

        counts = {j["title"]: j["application_count"] for j in response.get_json()["jobs"]}
        assert counts == {"Frontend Developer": 2, "Empty": 0}

    def test_public_job_list_shows_active_only(self, client, make_job):
        make_job(title="Open")
        make_job(title="Closed", is_active=False)

        response = client.get("/api/jobs")

        assert [j["title"] for j in response.get_json()["jobs"]] == ["Open"]

    def test_job_detail_not_found(self, client):
        assert client.get("/api/jobs/nope").status_code == 404


class TestApplicationRoutes:
    def test_apply(self, client, make_job, make_user, auth_headers):
        job = make_job()
        applicant = make_user()

        response = client.post("/api/applications", headers=auth_headers(applicant), json={
            "job_id": job.id, "phone_number": "+1 555", "resume_url": "uploads/cv.pdf",
            "cover_letter": "Hello",
        })

        assert response.status_code == 201
        data = response.get_json()["data"]
        assert data["status"] == "pending"
        assert data["match_score"] is None
        assert data["cv_analysis"] is None

    def test_apply_twice_conflicts(self, client, make_job, make_user, auth_headers):
        job = make_job()
        headers = auth_headers(make_user())
        body = {"job_id": job.id, "phone_number": "+1 555", "resume_url": "uploads/cv.pdf"}

        client.post("/api/applications", headers=headers, json=body)
        response = client.post("/api/applications", headers=headers, json=body)

        assert response.status_code == 409
        assert Application.query.filter_by(job_id=job.id).count() == 1

    def test_apply_to_inactive_job(self, client, make_job, make_user, auth_headers):
        job = make_job(is_active=False)

        response = client.post("/api/applications", headers=auth_headers(make_user()), json={
            "job_id": job.id, "phone_number": "+1 555", "resume_url": "uploads/cv.pdf",
        })

        assert response.status_code == 404

    def test_apply_missing_fields(self, client, make_job, make_user, auth_headers):
        job = make_job()

        response = client.post("/api/applications", headers=auth_headers(make_user()), json={"job_id": job.id})

        assert response.status_code == 400

    def test_my_applications_paginated(self, client, make_job, make_user, make_application, auth_headers):
        applicant = make_user()
        jobs = [make_job(title=f"Job {i}") for i in range(3)]
        for i, job in enumerate(jobs):
            make_application(job, applicant=applicant, minutes=i)

        response = client.get("/api/applications?page=1&limit=2", headers=auth_headers(applicant))

        body = response.get_json()
        assert [a["job"]["title"] for a in body["applications"]] == ["Job 2", "Job 1"]
        assert body["pagination"] == {
            "page": 1, "limit": 2, "total_count": 3, "total_pages": 2,
            "has_next_page": True, "has_prev_page": False,
        }

    def test_application_detail_visibility(self, client, recruiter, make_job, make_user, make_application, auth_headers):
        applicant = make_user()
        application = make_application(make_job(), applicant=applicant)
        url = f"/api/applications/{application.id}"

        assert client.get(url, headers=auth_headers(applicant)).status_code == 200
        assert client.get(url, headers=auth_headers(recruiter)).status_code == 200
        assert client.get(url, headers=auth_headers(make_user())).status_code == 403
        assert client.get(url).status_code == 401

    def test_status_update(self, client, recruiter, make_job, make_application, auth_headers):
        application = make_application(make_job())
        url = f"/api/recruiter/applications/{application.id}/status"

        bad = client.patch(url, headers=auth_headers(recruiter), json={"status": "hired"})
        good = client.patch(url, headers=auth_headers(recruiter), json={"status": "interviewing"})

        assert bad.status_code == 400
        assert good.status_code == 200
        assert good.get_json()["application"]["status"] == "interviewing"


class TestApplicantListingRoutes:
    def test_requires_login(self, client, make_job):
        job = make_job()

        response = client.get(f"/api/recruiter/jobs/{job.id}/applicants")

        assert response.status_code == 401
        assert "applicants" not in response.get_json()

    def test_bad_filters_anonymous_get_401(self, client, make_job):
        job = make_job()

        response = client.get(f"/api/recruiter/jobs/{job.id}/applicants?status=bogus&shortlisted=maybe")

        assert response.status_code == 401
        assert response.get_json() == {"error": "Unauthorized"}

    @pytest.mark.parametrize("query", ["status=hired", "shortlisted=maybe", "score=great"])
    def test_bad_filters_other_recruiter_get_403(self, client, make_job, make_user, auth_headers, query):
        job = make_job()

        response = client.get(
            f"/api/recruiter/jobs/{job.id}/applicants?{query}",
            headers=auth_headers(make_user(role="recruiter")),
        )

        assert response.status_code == 403

    def test_malformed_token_gets_error_body(self, client, make_job):
        job = make_job()

        response = client.get(
            f"/api/recruiter/jobs/{job.id}/applicants",
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401
        assert response.get_json() == {"error": "Invalid token"}

    def test_other_recruiter_forbidden(self, client, make_job, make_user, make_application, auth_headers):
        job = make_job()
        make_application(job)

        response = client.get(
            f"/api/recruiter/jobs/{job.id}/applicants",
            headers=auth_headers(make_user(role="recruiter")),
        )

        assert response.status_code == 403
        assert response.get_json() == {"error": "You are not authorized to view applicants for this job"}

    def test_unknown_job(self, client, recruiter, auth_headers):
        response = client.get("/api/recruiter/jobs/missing/applicants", headers=auth_headers(recruiter))

        assert response.status_code == 404

    def test_status_and_search(self, client, recruiter, make_job, make_user, make_application, auth_headers):
        job = make_job()
        make_application(job, applicant=make_user(name="React Fan"), status="reviewing")
        make_application(job, applicant=make_user(name="React Other"), status="pending")
        make_application(job, applicant=make_user(name="Vue Fan"), status="reviewing")

        response = client.get(
            f"/api/recruiter/jobs/{job.id}/applicants?status=reviewing&search=react",
            headers=auth_headers(recruiter),
        )

        body = response.get_json()
        assert body["job"]["id"] == job.id
        assert [a["applicant"]["name"] for a in body["applicants"]] == ["React Fan"]

    def test_shortlisted_param(self, client, recruiter, make_job, make_application, auth_headers):
        job = make_job(shortlist_size=2)
        make_application(job, similarity=0.9)
        make_application(job, similarity=0.6)
        make_application(job, similarity=0.3)

        response = client.get(
            f"/api/recruiter/jobs/{job.id}/applicants?shortlisted=true",
            headers=auth_headers(recruiter),
        )

        applicants = response.get_json()["applicants"]
        assert [a["match_score"] for a in applicants] == [0.9, 0.6]
        assert [a["match_percentage"] for a in applicants] == [90, 60]

    def test_shortlist_endpoint(self, client, recruiter, make_job, make_application, auth_headers):
        job = make_job(shortlist_size=3)
        make_application(job, similarity=0.9)
        make_application(job)

        response = client.get(f"/api/recruiter/jobs/{job.id}/shortlist", headers=auth_headers(recruiter))

        body = response.get_json()
        assert body["shortlist_size"] == 3
        assert body["filled"] == 2
        assert body["applicants"][1]["match_score"] is None

    def test_bad_status_filter(self, client, recruiter, make_job, auth_headers):
        job = make_job()

        response = client.get(
            f"/api/recruiter/jobs/{job.id}/applicants?status=hired", headers=auth_headers(recruiter)
        )

        assert response.status_code == 400


class TestAnalysisRoutes:
    def test_ingest_and_read_back(self, client, recruiter, make_job, make_application, auth_headers):
        job = make_job()
        application = make_application(job)

        response = client.post(
            f"/api/analysis/applications/{application.id}",
            json=analysis_payload(skills="Go, Rust,  Python "),
        )
        assert response.status_code == 200
        assert response.get_json()["cv_analysis"]["skills"] == ["Go", "Rust", "Python"]

        listing = client.get(f"/api/recruiter/jobs/{job.id}/applicants", headers=auth_headers(recruiter))
        assert listing.get_json()["applicants"][0]["match_score"] == 0.75

    def test_invalid_payload(self, client, make_job, make_application):
        application = make_application(make_job())

        response = client.post(
            f"/api/analysis/applications/{application.id}", json=analysis_payload(similarity=1.5)
        )

        assert response.status_code == 400

    def test_unknown_application(self, client):
        response = client.post("/api/analysis/applications/missing", json=analysis_payload())

        assert response.status_code == 404

    def test_pipeline_key_enforced_when_configured(self, app, client, make_job, make_application):
        app.config["ANALYSIS_API_KEY"] = "s3cret"
        application = make_application(make_job())
        url = f"/api/analysis/applications/{application.id}"

        denied = client.post(url, json=analysis_payload())
        allowed = client.post(url, json=analysis_payload(), headers={"X-Analysis-Key": "s3cret"})

        assert denied.status_code == 401
        assert allowed.status_code == 200
