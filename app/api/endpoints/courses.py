"""
Courses API

Standard CRUD plus the reads scoped to one course:
- /courses/{course_id}/contents     (ordered by `order`)
- /courses/{course_id}/enrollments  (admin, instructor)
- /courses/{course_id}/quizzes
"""
from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes, register_relation_route
from app.schemas.learning import (
    CourseCreate,
    CourseUpdate,
    CourseResponse,
    CourseContentResponse,
    EnrollmentResponse,
    QuizResponse,
)

router = APIRouter(tags=["Courses"])

courses = CrudResource(
    name="courses",
    label="Course",
    path="/courses",
    create_schema=CourseCreate,
    update_schema=CourseUpdate,
    response_schema=CourseResponse,
    filter_field="instructor_id",
)
register_crud_routes(router, courses)


register_relation_route(
    router,
    "/courses/{course_id}/contents",
    param="course_id",
    resource="course_contents",
    action="list_by_course",
    response_schema=CourseContentResponse,
    fetch=lambda storage, course_id: storage.get_course_contents_by_course(course_id),
)

register_relation_route(
    router,
    "/courses/{course_id}/enrollments",
    param="course_id",
    resource="enrollments",
    action="list_by_course",
    response_schema=EnrollmentResponse,
    fetch=lambda storage, course_id: storage.get_enrollments_by_course(course_id),
)

register_relation_route(
    router,
    "/courses/{course_id}/quizzes",
    param="course_id",
    resource="quizzes",
    action="list_by_course",
    response_schema=QuizResponse,
    fetch=lambda storage, course_id: storage.get_quizzes_by_course(course_id),
)
