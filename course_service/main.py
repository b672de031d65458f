# course_service/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings, get_settings
from .data_service import CourseRepository
from .database import COURSES_COLLECTION, connect, get_database
from .errors import CourseServiceError
from .middleware import LoggingMiddleware, configure_logging
from .models import (
    CourseCreate,
    CourseUpdate,
    DeleteResult,
    InsertResult,
    UpdateResult,
    serialize_documents,
)
from .service import CourseService

logger = logging.getLogger("course_service")

LIVENESS_MESSAGE = "🚀 Online Learning Platform Server is Running..."

router = APIRouter()


def get_course_service(request: Request) -> CourseService:
    return request.app.state.course_service


def build_course_service(database: AsyncIOMotorDatabase) -> CourseService:
    return CourseService(CourseRepository(database[COURSES_COLLECTION]))


def error_body(request: Request, status_code: int, error: str, message, **extra) -> JSONResponse:
    content = {
        "error": error,
        "message": message,
        "status_code": status_code,
        "path": str(request.url.path),
    }
    content.update(extra)
    # picked up by LoggingMiddleware for the response log line
    request.state.error_title = error
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


@router.get("/", response_class=PlainTextResponse)
def read_root():
    return LIVENESS_MESSAGE


@router.get("/courses")
async def get_all_courses(service: CourseService = Depends(get_course_service)):
    """Get all courses"""
    return serialize_documents(await service.list())


# Registered before /courses/{course_id} so the literal path wins
@router.get("/courses/popular-courses")
async def get_popular_courses(service: CourseService = Depends(get_course_service)):
    """Get the six most enrolled courses"""
    return serialize_documents(await service.list_popular())


@router.get("/courses/user/{email}")
async def get_courses_by_instructor(email: str, service: CourseService = Depends(get_course_service)):
    """Get the courses taught by the instructor with this email"""
    return serialize_documents(await service.list_by_instructor_email(email))


@router.get("/courses/{course_id}")
async def get_course(course_id: str, service: CourseService = Depends(get_course_service)):
    """Get a course by ID"""
    return serialize_documents(await service.get_by_id(course_id))


@router.post("/courses", response_model=InsertResult, status_code=status.HTTP_201_CREATED)
async def create_course(course: CourseCreate, service: CourseService = Depends(get_course_service)):
    """Create a new course"""
    return await service.create(course)


@router.patch("/courses/{course_id}", response_model=UpdateResult)
async def update_course(course_id: str, course: CourseUpdate, service: CourseService = Depends(get_course_service)):
    """Update a course"""
    return await service.update(course_id, course)


@router.delete("/courses/{course_id}", response_model=DeleteResult)
async def delete_course(course_id: str, service: CourseService = Depends(get_course_service)):
    """Delete a course"""
    return await service.delete(course_id)


@router.get("/instructors/top")
async def get_top_instructors(service: CourseService = Depends(get_course_service)):
    """Get the four best rated instructors"""
    return serialize_documents(await service.top_instructors())


def create_app(settings: Optional[Settings] = None, database: Optional[AsyncIOMotorDatabase] = None) -> FastAPI:
    """Build the application.

    When `database` is given it is used as-is for the lifetime of the app.
    Otherwise a client is opened and pinged on startup, and closed on
    shutdown; a failed ping aborts startup.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if database is None:
            client = await connect(settings)
            app.state.course_service = build_course_service(get_database(client, settings))
        logger.info(f"{settings.app_name} ready ({settings.environment})")
        yield
        if client is not None:
            client.close()
            logger.info("MongoDB connection closed")

    app = FastAPI(title=settings.app_name, version=__version__, lifespan=lifespan)
    app.state.settings = settings
    if database is not None:
        app.state.course_service = build_course_service(database)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CourseServiceError)
    async def course_service_error_handler(request: Request, exc: CourseServiceError):
        if exc.status_code >= 500:
            logger.error(f"{exc.title}: {exc.message} | Path: {request.url.path}")
        else:
            logger.warning(f"{exc.title}: {exc.message} | Path: {request.url.path}")
        return error_body(request, exc.status_code, exc.title, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(f"HTTP Exception: {exc.status_code} - {exc.detail}")
        return error_body(request, exc.status_code, "Error", exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation failed: {request.method} {request.url.path}")
        return error_body(
            request,
            422,
            "Validation Error",
            "Request payload failed validation",
            details=exc.errors(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {str(exc)} | Path: {request.url.path}")
        return error_body(request, 500, "Internal Server Error", "An unexpected error occurred")

    app.include_router(router)
    return app


def run():
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


app = create_app()
