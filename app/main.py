import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from app.api import auth, users, posts
from app.core.config import settings, validate_runtime_config
from app.core.exceptions import AppError, Unauthenticated
from app.core.uploads import get_upload_dir
from app.db.session import init_db

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    validate_runtime_config()
    try:
        init_db()
    except SQLAlchemyError:
        logger.exception("Database initialization failed. Check DATABASE_URL.")
    yield


app = FastAPI(title="School Posts API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Некорректные данные запроса", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    # Наружу - только общее сообщение, подробности - в лог
    logger.exception(f"🔥 Ошибка базы данных на {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Внутренняя ошибка сервера"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"🔥 Необработанная ошибка на {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Внутренняя ошибка сервера"})


@app.get("/")
def root():
    return {"status": "School Posts API Running"}


app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(posts.router, prefix="/api/posts", tags=["posts"])

# Картинки постов отдаются как статика
app.mount("/uploads", StaticFiles(directory=str(get_upload_dir())), name="uploads")
