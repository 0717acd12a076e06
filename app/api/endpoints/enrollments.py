"""
Enrollments API

- Admin creates and deletes enrollments; finance may adjust payment state
- A student reads only their own rows (by id or under /students/{student_id})
- Duplicate (student, course) pairs are allowed
"""
from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes, register_relation_route
from app.schemas.learning import EnrollmentCreate, EnrollmentUpdate, EnrollmentResponse

router = APIRouter(tags=["Enrollments"])

enrollments = CrudResource(
    name="enrollments",
    label="Enrollment",
    path="/enrollments",
    create_schema=EnrollmentCreate,
    update_schema=EnrollmentUpdate,
    response_schema=EnrollmentResponse,
    filter_field="payment_status",
)
register_crud_routes(router, enrollments)

register_relation_route(
    router,
    "/students/{student_id}/enrollments",
    param="student_id",
    resource="enrollments",
    action="list_by_student",
    response_schema=EnrollmentResponse,
    fetch=lambda storage, student_id: storage.get_enrollments_by_student(student_id),
)
