"""
Quiz results API

Anyone signed in may submit a result, but only under their own id unless
they are admin or instructor. Students read only their own results.
"""
from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes, register_relation_route
from app.schemas.learning import QuizResultCreate, QuizResultUpdate, QuizResultResponse

router = APIRouter(tags=["Quiz Results"])

quiz_results = CrudResource(
    name="quiz_results",
    label="Quiz result",
    path="/quiz-results",
    create_schema=QuizResultCreate,
    update_schema=QuizResultUpdate,
    response_schema=QuizResultResponse,
    filter_field="quiz_id",
)
register_crud_routes(router, quiz_results)

register_relation_route(
    router,
    "/students/{student_id}/quiz-results",
    param="student_id",
    resource="quiz_results",
    action="list_by_student",
    response_schema=QuizResultResponse,
    fetch=lambda storage, student_id: storage.get_quiz_results_by_student(student_id),
)
