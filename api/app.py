"""
api/app.py
----------
Builds the FastAPI application and wires repositories and services.
"""

from dataclasses import dataclass

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api.accounts import accounts_router
from api.courses import courses_router
from api.responses import INVALID_REQUEST, bad_request
from config import CORS_ALLOW_ORIGINS
from db.connection import Database
from db.transaction import TransactionManager
from repositories.account_repo import AccountRepository
from repositories.course_repo import CourseRepository
from services.account_service import AccountService
from services.auth_service import AuthService
from services.course_service import CourseService
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Services:
    """Everything the routes reach through `request.app.state.services`."""
    accounts: AccountRepository
    courses: CourseRepository
    auth: AuthService
    account_service: AccountService
    course_service: CourseService


def build_services(db: Database | None = None) -> Services:
    """Wire repositories and services around one shared Database handle."""
    db = db or Database()
    tx_manager = TransactionManager(db)
    accounts = AccountRepository(db)
    courses = CourseRepository(db)
    return Services(
        accounts=accounts,
        courses=courses,
        auth=AuthService(accounts),
        account_service=AccountService(accounts, tx_manager),
        course_service=CourseService(courses, tx_manager),
    )


def create_app(services: Services | None = None) -> FastAPI:
    """
    Create the application.

    Args:
        services: Pre-built services; defaults to the pool-backed wiring.
    """
    app = FastAPI(title="coursehub")
    app.state.services = services or build_services()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError):
        logger.info(f"Invalid request body for {request.url.path}")
        return bad_request(INVALID_REQUEST)

    @app.get("/")
    def hello():
        return {"message": "Hello, World!"}

    app.include_router(accounts_router)
    app.include_router(courses_router)
    return app
