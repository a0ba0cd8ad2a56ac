"""
Course routes: public catalog, instructor-owned mutations and cascades.
"""

import pytest

from coursehub_backend.model import Course, CourseModule, Lesson
from coursehub_backend.tests.fixtures import (
    APPLICATION_PAYLOAD,
    auth_headers,
    create_course,
    create_token,
    create_user,
)


COURSE_PAYLOAD = {
    "title": "Practical SQLAlchemy",
    "description": "Sessions, queries and migrations",
    "level": "intermediate",
    "price": "49.90",
}


def login(db, role="student"):
    user = create_user(db, role=role)
    return user, auth_headers(create_token(db, user))


def test_student_becomes_instructor_and_creates_course(client, db):
    student, student_headers = login(db, "student")
    admin, admin_headers = login(db, "admin")

    response = client.post("/instructor/courses", json=COURSE_PAYLOAD, headers=student_headers)
    assert response.status_code == 403

    response = client.post("/instructor-applications", json=APPLICATION_PAYLOAD, headers=student_headers)
    assert response.status_code == 201
    application_id = response.json()["id"]

    response = client.put(
        f"/admin/instructor-applications/{application_id}",
        json={"status": "approved", "comments": "Welcome aboard"},
        headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "approved"

    response = client.get("/auth/user", headers=student_headers)
    assert response.json()["role"] == "instructor"

    response = client.post("/instructor/courses", json=COURSE_PAYLOAD, headers=student_headers)
    assert response.status_code == 201
    assert response.json()["instructor_id"] == student.id


def test_only_owner_or_admin_deletes_course(client, db):
    owner, owner_headers = login(db, "instructor")
    other, other_headers = login(db, "instructor")
    admin, admin_headers = login(db, "admin")

    response = client.post("/instructor/courses", json=COURSE_PAYLOAD, headers=owner_headers)
    course_id = response.json()["id"]

    response = client.delete(f"/instructor/courses/{course_id}", headers=other_headers)
    assert response.status_code == 403
    db.expire_all()
    assert db.get(Course, course_id) is not None

    response = client.delete(f"/instructor/courses/{course_id}", headers=admin_headers)
    assert response.status_code == 204
    db.expire_all()
    assert db.get(Course, course_id) is None


def test_owner_updates_and_other_instructor_cannot(client, db):
    owner, owner_headers = login(db, "instructor")
    other, other_headers = login(db, "instructor")
    course = create_course(db, owner, title="Old title")

    response = client.put(f"/instructor/courses/{course.id}", json={"title": "Hijacked"}, headers=other_headers)
    assert response.status_code == 403

    response = client.put(f"/instructor/courses/{course.id}", json={"title": "New title"}, headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["title"] == "New title"


def test_owner_cannot_be_reassigned(client, db):
    owner, owner_headers = login(db, "instructor")
    other = create_user(db, role="instructor")
    course = create_course(db, owner)

    response = client.put(
        f"/instructor/courses/{course.id}",
        json={"title": "Still mine", "instructor_id": other.id},
        headers=owner_headers
    )

    assert response.status_code == 200
    assert response.json()["instructor_id"] == owner.id


def test_creator_is_stamped_as_owner(client, db):
    instructor, headers = login(db, "instructor")
    other = create_user(db, role="instructor")

    response = client.post(
        "/instructor/courses",
        json=dict(COURSE_PAYLOAD, instructor_id=other.id),
        headers=headers
    )

    assert response.status_code == 201
    assert response.json()["instructor_id"] == instructor.id


def test_missing_course(client, db):
    instructor, instructor_headers = login(db, "instructor")
    admin, admin_headers = login(db, "admin")

    assert client.delete("/instructor/courses/missing", headers=instructor_headers).status_code == 403
    assert client.delete("/instructor/courses/missing", headers=admin_headers).status_code == 404
    assert client.put("/instructor/courses/missing", json={"title": "x"}, headers=admin_headers).status_code == 404


@pytest.mark.parametrize("role", ["student", None])
def test_students_cannot_mutate_courses(client, db, role):
    owner = create_user(db, role="instructor")
    course = create_course(db, owner)
    student, headers = login(db, role)

    assert client.post("/instructor/courses", json=COURSE_PAYLOAD, headers=headers).status_code == 403
    assert client.put(f"/instructor/courses/{course.id}", json={"title": "x"}, headers=headers).status_code == 403
    assert client.delete(f"/instructor/courses/{course.id}", headers=headers).status_code == 403
    assert client.get("/instructor/stats", headers=headers).status_code == 403


def test_unauthenticated_mutation(client, db):
    course = create_course(db, create_user(db, role="instructor"))

    assert client.post("/instructor/courses", json=COURSE_PAYLOAD).status_code == 401
    assert client.delete(f"/instructor/courses/{course.id}").status_code == 401


def test_forbidden_before_validation(client, db):
    student, headers = login(db, "student")

    response = client.post("/instructor/courses", json={"price": "not a number"}, headers=headers)

    assert response.status_code == 403


def test_delete_cascades_to_modules_and_lessons(client, db):
    owner, headers = login(db, "instructor")
    course = create_course(db, owner)
    module = CourseModule(course_id=course.id, title="Basics", position=1)
    db.add(module)
    db.flush()
    db.add(Lesson(module_id=module.id, title="Hello", position=1))
    db.commit()

    response = client.delete(f"/instructor/courses/{course.id}", headers=headers)

    assert response.status_code == 204
    db.expire_all()
    assert db.query(CourseModule).count() == 0
    assert db.query(Lesson).count() == 0


def test_instructor_lists_only_own_courses(client, db):
    owner, headers = login(db, "instructor")
    create_course(db, owner, title="Mine")
    create_course(db, owner, title="Also mine", published=False)
    create_course(db, create_user(db, role="instructor"), title="Theirs")

    response = client.get("/instructor/courses", headers=headers)

    assert response.status_code == 200
    assert response.headers["X-Total-Count"] == "2"
    assert {c["title"] for c in response.json()} == {"Mine", "Also mine"}

    stats = client.get("/instructor/stats", headers=headers).json()
    assert stats == {"total_courses": 2, "published_courses": 1}


def test_public_catalog(client, db):
    owner = create_user(db, role="instructor")
    published = create_course(db, owner, title="Visible", level="advanced")
    hidden = create_course(db, owner, title="Draft", published=False)

    response = client.get("/courses")
    assert response.status_code == 200
    assert response.headers["X-Total-Count"] == "1"
    assert [c["id"] for c in response.json()] == [published.id]

    assert client.get("/courses", params={"level": "beginner"}).json() == []
    assert client.get("/courses", params={"search": "visi"}).headers["X-Total-Count"] == "1"

    assert client.get(f"/courses/{published.id}").status_code == 200
    assert client.get(f"/courses/{hidden.id}").status_code == 404


def test_categories_are_admin_managed(client, db):
    instructor, instructor_headers = login(db, "instructor")
    admin, admin_headers = login(db, "admin")
    category = {"name": "Data", "slug": "data"}

    assert client.post("/categories", json=category, headers=instructor_headers).status_code == 403

    response = client.post("/categories", json=category, headers=admin_headers)
    assert response.status_code == 201

    assert client.post("/categories", json=category, headers=admin_headers).status_code == 400
    assert [c["slug"] for c in client.get("/categories").json()] == ["data"]
