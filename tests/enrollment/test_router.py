"""Tests for enrollment domain router."""

from sqlmodel import Session, select

from enrollhub.course.models import Course
from enrollhub.enrollment.models import Enrollment

API = "/api/v1/enrollment"


def _enrollments(session: Session) -> list[Enrollment]:
    return list(session.exec(select(Enrollment)).all())


class TestEnroll:
    def test_enrolls_and_sends_confirmation(
        self, client, auth_headers, test_user, course, mailer, session
    ):
        response = client.post(
            f"{API}/",
            json={"course_id": course.id, "user_id": test_user.id},
            headers=auth_headers(test_user),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == (
            f'Enrolled in the course "{course.title}" successfully. '
            f"Enrollment confirmation has been sent to {test_user.email}."
        )
        assert body["data"]["user_id"] == test_user.id
        assert body["data"]["course_id"] == course.id
        assert len(_enrollments(session)) == 1
        assert mailer.last.email == test_user.email
        assert mailer.last.subject == "Course Enrollment Confirmation"

    def test_duplicate_is_conflict(
        self, client, auth_headers, test_user, course, session
    ):
        payload = {"course_id": course.id, "user_id": test_user.id}
        client.post(f"{API}/", json=payload, headers=auth_headers(test_user))

        response = client.post(f"{API}/", json=payload, headers=auth_headers(test_user))

        assert response.status_code == 409
        assert response.json()["type"] == "already_enrolled"
        assert len(_enrollments(session)) == 1

    def test_missing_ids(self, client, auth_headers, test_user):
        response = client.post(
            f"{API}/", json={"course_id": 1}, headers=auth_headers(test_user)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Provide courseID and userID to proceed."

    def test_unknown_course(self, client, auth_headers, test_user, session):
        response = client.post(
            f"{API}/",
            json={"course_id": 999, "user_id": test_user.id},
            headers=auth_headers(test_user),
        )

        assert response.status_code == 404
        assert response.json()["type"] == "course_not_found"
        assert _enrollments(session) == []

    def test_unknown_user(self, client, auth_headers, test_user, course, session):
        response = client.post(
            f"{API}/",
            json={"course_id": course.id, "user_id": 999},
            headers=auth_headers(test_user),
        )

        assert response.status_code == 404
        assert response.json()["type"] == "user_not_found"
        assert _enrollments(session) == []

    def test_mail_failure_keeps_enrollment(
        self, client, auth_headers, test_user, course, mailer, session
    ):
        mailer.fail = True

        response = client.post(
            f"{API}/",
            json={"course_id": course.id, "user_id": test_user.id},
            headers=auth_headers(test_user),
        )

        assert response.status_code == 500
        assert response.json()["type"] == "mail_delivery_error"
        assert len(_enrollments(session)) == 1

    def test_requires_session(self, client, test_user, course):
        response = client.post(
            f"{API}/", json={"course_id": course.id, "user_id": test_user.id}
        )

        assert response.status_code == 401


class TestEnrolledCourses:
    def test_lists_courses_of_user(
        self, client, auth_headers, test_user, make_user, course, session
    ):
        other_course = Course(
            title="Advanced SQL",
            category="Data Science",
            price=59.0,
            duration=20,
            status="Active",
        )
        session.add(other_course)
        session.commit()
        session.refresh(other_course)
        other_user = make_user(email="other@example.com")
        session.add(Enrollment(user_id=test_user.id, course_id=course.id))
        session.add(Enrollment(user_id=other_user.id, course_id=other_course.id))
        session.commit()

        response = client.get(f"{API}/{test_user.id}", headers=auth_headers(test_user))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [c["title"] for c in body["data"]] == [course.title]

    def test_no_enrollments(self, client, auth_headers, test_user):
        response = client.get(f"{API}/{test_user.id}", headers=auth_headers(test_user))

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}
