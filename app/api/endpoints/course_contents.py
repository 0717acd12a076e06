"""
Course contents API

Videos and PDFs that belong to a course. Comments on a content item are
listed under /content/{content_id}/comments (see comments.py).
"""
from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes
from app.schemas.learning import CourseContentCreate, CourseContentUpdate, CourseContentResponse

router = APIRouter(tags=["Course Contents"])

course_contents = CrudResource(
    name="course_contents",
    label="Course content",
    path="/course-contents",
    create_schema=CourseContentCreate,
    update_schema=CourseContentUpdate,
    response_schema=CourseContentResponse,
    filter_field="course_id",
)
register_crud_routes(router, course_contents)
