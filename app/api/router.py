from fastapi import APIRouter
from app.api.endpoints import (
    auth,
    users,
    courses,
    course_contents,
    enrollments,
    quizzes,
    quiz_questions,
    quiz_results,
    comments,
    projects,
    clients,
    milestones,
    tasks,
    expenses,
    project_payments,
    reports,
    health,
)

api_router = APIRouter()

api_router.include_router(health.router)

# Session
api_router.include_router(auth.router)
api_router.include_router(users.router)

# Learning
api_router.include_router(courses.router)
api_router.include_router(course_contents.router)
api_router.include_router(enrollments.router)
api_router.include_router(quizzes.router)
api_router.include_router(quiz_questions.router)
api_router.include_router(quiz_results.router)
api_router.include_router(comments.router)

# Projects
api_router.include_router(projects.router)
api_router.include_router(clients.router)
api_router.include_router(milestones.router)
api_router.include_router(tasks.router)

# Finance
api_router.include_router(expenses.router)
api_router.include_router(project_payments.router)
api_router.include_router(reports.router)
