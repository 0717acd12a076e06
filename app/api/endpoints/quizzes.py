"""
Quizzes API

Standard CRUD plus:
- /quizzes/{quiz_id}/questions  (ordered by `order`)
- /quizzes/{quiz_id}/results    (admin, instructor)
"""
from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes, register_relation_route
from app.schemas.learning import (
    QuizCreate,
    QuizUpdate,
    QuizResponse,
    QuizQuestionResponse,
    QuizResultResponse,
)

router = APIRouter(tags=["Quizzes"])

quizzes = CrudResource(
    name="quizzes",
    label="Quiz",
    path="/quizzes",
    create_schema=QuizCreate,
    update_schema=QuizUpdate,
    response_schema=QuizResponse,
    filter_field="course_id",
)
register_crud_routes(router, quizzes)

register_relation_route(
    router,
    "/quizzes/{quiz_id}/questions",
    param="quiz_id",
    resource="quiz_questions",
    action="list_by_quiz",
    response_schema=QuizQuestionResponse,
    fetch=lambda storage, quiz_id: storage.get_quiz_questions_by_quiz(quiz_id),
)

register_relation_route(
    router,
    "/quizzes/{quiz_id}/results",
    param="quiz_id",
    resource="quiz_results",
    action="list_by_quiz",
    response_schema=QuizResultResponse,
    fetch=lambda storage, quiz_id: storage.get_quiz_results_by_quiz(quiz_id),
)
