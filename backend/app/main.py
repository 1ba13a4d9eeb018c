import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import firebase_admin
from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.firebase import get_firestore_client, initialize_firebase
from app.core.logging import configure_logging
from app.core.security import FirebaseIdentityVerifier
from app.dependencies import get_record_store
from app.routers import ask
from app.services.llm.openai_chat import OpenAIChatProvider
from app.services.records import RecordStore


settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: build the external collaborators once
    configure_logging(settings.log_level)
    firebase_app = initialize_firebase(settings)
    app.state.identity_verifier = FirebaseIdentityVerifier(firebase_app)
    app.state.record_store = RecordStore(
        get_firestore_client(firebase_app),
        users_collection=settings.users_collection,
        chat_history_collection=settings.chat_history_collection,
    )
    app.state.completion_provider = OpenAIChatProvider(
        api_key=settings.deepseek_api_key,
        base_url=settings.deepseek_base_url,
    )
    logger.info("REMI backend ready on port %s", settings.port)
    yield
    # Shutdown
    firebase_admin.delete_app(firebase_app)


app = FastAPI(
    title="REMI API",
    description="AI student assistant grounded on academic records",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


# Include routers
app.include_router(ask.router, prefix="/ask", tags=["Assistant"])


@app.get("/health")
async def health_check(store: RecordStore = Depends(get_record_store)):
    try:
        await store.ping()
    except Exception as e:
        logger.error("Health check failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "unhealthy", "firebase": "disconnected", "error": str(e)},
        )

    return {
        "status": "healthy",
        "firebase": "connected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
