from fastapi import FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from typing import Optional
import logging, os

import uvicorn

from .classifier import GeminiClassifier
from .config import Settings
from .database import QueryHistoryStore, make_engine
from .logger import setup_logging
from .resolver import ResponseResolver
from .rules import RULE_TABLE
from .schemas import AnalysisResult, AnalyzeRequest, HistoryResponse, SymptomQuery
from .templates import MEDICAL_DISCLAIMER, validate_catalog

logger = logging.getLogger(__name__)

SERVICE_NAME = "Healthcare Symptom Checker API"
VERSION = "1.0.0"
MIN_SYMPTOM_LENGTH = 3

ENDPOINTS = {
    "POST /api/analyze-symptoms": "Analyze symptoms and get recommendations",
    "GET /api/health": "Health check endpoint",
    "GET /api/history": "Get query history",
}


def build_resolver(settings: Settings) -> ResponseResolver:
    if not settings.classifier_enabled:
        return ResponseResolver()
    classifier = GeminiClassifier(settings.google_api_key, model_name=settings.llm_model)
    return ResponseResolver(classifier, timeout=settings.classifier_timeout)


def create_app(
    settings: Optional[Settings] = None,
    resolver: Optional[ResponseResolver] = None,
    store: Optional[QueryHistoryStore] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)
    validate_catalog()

    store = store or QueryHistoryStore(make_engine(settings.database_url))
    resolver = resolver or build_resolver(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create tables when app starts."""
        store.create_tables()
        logger.info("%s started (classifier: %s)", SERVICE_NAME, resolver.mode)
        yield

    app = FastAPI(title=SERVICE_NAME, version=VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.resolver = resolver

    # -----------------------------
    # CORS MIDDLEWARE
    # -----------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # -----------------------------
    # ERROR HANDLERS
    # -----------------------------
    @app.exception_handler(404)
    async def not_found(request: Request, exc):
        return JSONResponse(status_code=404, content={
            "error": "Endpoint not found",
            "message": "The requested endpoint does not exist",
            "available_endpoints": list(ENDPOINTS),
        })

    @app.exception_handler(405)
    async def method_not_allowed(request: Request, exc):
        return JSONResponse(status_code=405, content={
            "error": "Method not allowed",
            "message": f"{request.method} is not supported on {request.url.path}",
            "available_endpoints": list(ENDPOINTS),
        })

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={
            "error": "Internal server error",
            "message": "An unexpected error occurred",
            "disclaimer": MEDICAL_DISCLAIMER,
        })

    # -----------------------------
    # ROUTES
    # -----------------------------
    @app.get("/")
    def index():
        return {
            "message": SERVICE_NAME,
            "status": "active",
            "version": VERSION,
            "endpoints": ENDPOINTS,
        }

    @app.post("/api/analyze-symptoms", response_model=AnalysisResult)
    async def analyze_symptoms(body: AnalyzeRequest, request: Request):
        symptoms = (body.symptoms or "").strip()
        if not symptoms:
            return JSONResponse(status_code=400, content={
                "error": "Symptoms are required",
                "message": "Please provide a description of your symptoms",
            })
        if len(symptoms) < MIN_SYMPTOM_LENGTH:
            return JSONResponse(status_code=400, content={
                "error": "Symptoms too short",
                "message": "Please provide a more detailed description of your symptoms",
            })

        query = SymptomQuery(symptoms=symptoms, age=body.age, gender=body.gender)
        result = await request.app.state.resolver.resolve(query)

        await run_in_threadpool(
            request.app.state.store.save,
            query.symptoms,
            query.age,
            query.gender,
            result.model_dump(mode="json"),
        )
        return result

    @app.get("/api/health")
    def health(request: Request):
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "version": VERSION,
            "environment": request.app.state.settings.environment,
            "database": "connected" if request.app.state.store.ping() else "unavailable",
            "features": {
                "symptom_analysis": "active",
                "medical_categories": len(RULE_TABLE),
                "dynamic_responses": "enabled",
                "classifier": request.app.state.resolver.mode,
            },
        }

    @app.get("/api/history", response_model=HistoryResponse)
    def get_history(request: Request, limit: int = Query(10, ge=1, le=100)):
        try:
            records = request.app.state.store.query_recent(limit)
        except SQLAlchemyError:
            logger.exception("Database query error")
            return JSONResponse(status_code=500, content={
                "error": "Database error",
                "message": "Could not retrieve query history",
            })
        return HistoryResponse(
            recent_queries=records,
            total_returned=len(records),
            disclaimer="Query history is for demonstration purposes only",
        )

    return app


def main() -> None:
    uvicorn.run(
        "symptom_checker.app:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
