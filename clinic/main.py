from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from dotenv import load_dotenv
import logging

# Load environment variables as early as possible
load_dotenv()

from .config import settings
from .database import create_db_and_tables
from .exceptions import ClinicError, clinic_exception_handler, create_error_response, http_exception_handler
from .routers import admins_router, appointments_router, doctors_router, patients_router, prescriptions_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME}...")
    create_db_and_tables()
    yield
    logger.info(f"Shutting down {settings.APP_NAME}...")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        message = str(err.get("msg", "invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        fields.append({"field": ".".join(loc), "message": message})
    content = create_error_response("Validation failed", 422)
    content["fields"] = fields
    return JSONResponse(status_code=422, content=content)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_exception_handler(ClinicError, clinic_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(doctors_router.router)
    app.include_router(patients_router.router)
    app.include_router(appointments_router.router)
    app.include_router(prescriptions_router.router)
    app.include_router(admins_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok", "version": settings.APP_VERSION}

    return app


app = create_app()
