import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.config import settings
from core.errors import AuthorizationError, ReminderError
from db.session import init_db
from api.routers import v1_router


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)


# Exception handler for validation errors (422)
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"[422 Validation Error] {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# Reminder job errors keep the {ok, error} body of the cron endpoint
@app.exception_handler(ReminderError)
async def reminder_exception_handler(request: Request, exc: ReminderError):
    if isinstance(exc, AuthorizationError):
        logger.warning(f"[Cron] Rejected {request.url.path}: {exc}")
        status_code = status.HTTP_401_UNAUTHORIZED
    else:
        logger.error(f"[Cron] {request.url.path} failed: {exc}")
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=status_code, content={"ok": False, "error": str(exc)})


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API v1 routes
app.include_router(v1_router.routes, prefix="/api")


@app.get("/")
def read_root():
    return {"message": settings.PROJECT_NAME, "version": settings.VERSION}
