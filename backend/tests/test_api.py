"""End-to-end tests for the report endpoints."""

from datetime import datetime
from unittest.mock import patch

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

PREFIX = "/quran-teacher-report"


@pytest.fixture
def graded_march(make_user, make_submission):
    teacher = make_user("Hodan", "", "Omar", role="teacher", gender="female")
    student = make_user("Sagal", "", "Farah", role="student", gender="female")
    make_submission(student, teacher, datetime(2024, 3, 5), feedback_files=[{"url": "a"}])
    make_submission(student, teacher, datetime(2024, 3, 6), feedback="")
    return teacher


class TestGradingReportEndpoint:
    def test_report(self, client, viewer_headers, graded_march):
        response = client.get(
            f"{PREFIX}/report", params={"from": "2024-03-01", "to": "2024-03-31", "gender": "all"},
            headers=viewer_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "totalAssignments": 2,
            "gradedAssignments": 1,
            "ungradedAssignments": 1,
            "teachers": [{"id": 1, "teacher": "Hodan Omar", "assignmentsGraded": 1}],
        }

    def test_missing_from(self, client, viewer_headers):
        response = client.get(f"{PREFIX}/report", params={"to": "2024-03-31", "gender": "all"}, headers=viewer_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": 'Missing "from" or "to" or "gender" query parameters.'}

    def test_empty_gender_counts_as_missing(self, client, viewer_headers):
        response = client.get(
            f"{PREFIX}/report", params={"from": "2024-03-01", "to": "2024-03-31", "gender": ""},
            headers=viewer_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_blank_gender_counts_as_missing(self, client, viewer_headers):
        response = client.get(
            f"{PREFIX}/report", params={"from": "2024-03-01", "to": "2024-03-31", "gender": "  "},
            headers=viewer_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": 'Missing "from" or "to" or "gender" query parameters.'}

    def test_malformed_only_activity(self, client, viewer_headers):
        response = client.get(
            f"{PREFIX}/report",
            params={"from": "2024-03-01", "to": "2024-03-31", "gender": "all", "onlyActivity": "maybe"},
            headers=viewer_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid query parameters: onlyActivity."}

    def test_invalid_date(self, client, viewer_headers):
        response = client.get(
            f"{PREFIX}/report", params={"from": "March", "to": "2024-03-31", "gender": "all"},
            headers=viewer_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "from" in response.json()["error"]

    def test_activity_field_selector(self, client, viewer_headers, make_user, make_submission):
        teacher = make_user("Hodan", "", "Omar", role="teacher")
        student = make_user("Sagal", "", "Farah", role="student")
        make_submission(student, teacher, datetime(2024, 1, 5), updated_at=datetime(2024, 3, 5), feedback="ok")
        params = {"from": "2024-03-01", "to": "2024-03-31", "gender": "all"}

        by_creation = client.get(f"{PREFIX}/report", params=params, headers=viewer_headers).json()
        by_update = client.get(
            f"{PREFIX}/report", params={**params, "activityField": "updatedAt"}, headers=viewer_headers
        ).json()
        only_activity = client.get(
            f"{PREFIX}/report", params={**params, "onlyActivity": "true"}, headers=viewer_headers
        ).json()

        assert by_creation["totalAssignments"] == 0
        assert by_update["totalAssignments"] == 1
        assert only_activity == by_update

    def test_unknown_activity_field(self, client, viewer_headers):
        response = client.get(
            f"{PREFIX}/report",
            params={"from": "2024-03-01", "to": "2024-03-31", "gender": "all", "activityField": "gradedAt"},
            headers=viewer_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_allow_list(self, client, viewer_headers, allow_list, graded_march, make_user):
        make_user("Ahmed", "", "Nur", role="teacher")
        allow_list.append("Ahmed Nur")

        response = client.get(
            f"{PREFIX}/report", params={"from": "2024-03-01", "to": "2024-03-31", "gender": "all"},
            headers=viewer_headers,
        )

        assert [row["teacher"] for row in response.json()["teachers"]] == ["Ahmed Nur"]

    def test_database_failure_is_hidden(self, client, viewer_headers):
        with patch(
            "app.reports.grading.AssignmentGradingReport.build",
            side_effect=OperationalError("SELECT", {}, Exception("connection refused")),
        ):
            response = client.get(
                f"{PREFIX}/report", params={"from": "2024-03-01", "to": "2024-03-31", "gender": "all"},
                headers=viewer_headers,
            )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Server error"}


class TestSurveyEndpoint:
    def test_survey(self, client, viewer_headers, make_survey):
        make_survey("agent", "AABBCCDD-1234", agent_id=1001)
        make_survey("friend", "somehash123")

        response = client.get(f"{PREFIX}/survey", params={"from": "2024-03-01", "to": "2024-03-31"},
                              headers=viewer_headers)

        assert response.status_code == status.HTTP_200_OK
        rows = response.json()
        assert rows[0] == {"agent": "Agent One", "android": 0, "ios": 1, "total": 1}
        assert rows[1] == {"agent": "Friend", "android": 1, "ios": 0, "total": 1}
        assert rows[-1] == {"agent": "Total", "android": 1, "ios": 1, "total": 2}

    def test_missing_to(self, client, viewer_headers):
        response = client.get(f"{PREFIX}/survey", params={"from": "2024-03-01"}, headers=viewer_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": 'Missing "from" or "to" query parameters!'}


class TestSubmissionsEndpoint:
    def test_submissions(self, client, admin_headers, graded_march):
        response = client.get(
            f"{PREFIX}/submissions",
            params={"from": "2024-03-01", "to": "2024-03-31", "teacher": "Hodan Omar"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [
            {
                "studentName": "Sagal Farah",
                "submissionUrl": None,
                "status": "passed",
                "teacherResponseAudio": "a",
                "teacherResponseText": None,
            },
            {
                "studentName": "Sagal Farah",
                "submissionUrl": None,
                "status": "passed",
                "teacherResponseAudio": None,
                "teacherResponseText": "",
            },
        ]

    def test_missing_teacher(self, client, admin_headers):
        response = client.get(
            f"{PREFIX}/submissions", params={"from": "2024-03-01", "to": "2024-03-31"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": 'Missing "from", "to", or "teacher" query parameters!'}

    def test_unexpected_failure_is_hidden(self, client, admin_headers, make_user, make_submission):
        teacher = make_user("Hodan", "", "Omar", role="teacher")
        student = make_user("Sagal", "", "Farah", role="student")
        make_submission(student, teacher, datetime(2024, 3, 5), attachments=["not-a-dict"])

        response = client.get(
            f"{PREFIX}/submissions",
            params={"from": "2024-03-01", "to": "2024-03-31", "teacher": "Hodan Omar"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Server error"}


class TestApplication:
    def test_root_redirects_to_frontend(self, client):
        response = client.get("/", follow_redirects=False)

        assert response.status_code == status.HTTP_307_TEMPORARY_REDIRECT
        assert response.headers["location"] == f"{PREFIX}/"

    def test_security_headers(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"
