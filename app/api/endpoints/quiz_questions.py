from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes
from app.schemas.learning import QuizQuestionCreate, QuizQuestionUpdate, QuizQuestionResponse

router = APIRouter(tags=["Quiz Questions"])

quiz_questions = CrudResource(
    name="quiz_questions",
    label="Quiz question",
    path="/quiz-questions",
    create_schema=QuizQuestionCreate,
    update_schema=QuizQuestionUpdate,
    response_schema=QuizQuestionResponse,
    filter_field="quiz_id",
)
register_crud_routes(router, quiz_questions)
