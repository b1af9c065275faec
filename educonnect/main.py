# educonnect/main.py
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from educonnect import __version__
from educonnect.api import admin, auth, booking, course, dashboard, notification, review, users
from educonnect.config import settings
from educonnect.services.user_service import bootstrap_admin
from educonnect.storage import MemStorage

logger = logging.getLogger(__name__)


def create_app(storage: Optional[MemStorage] = None) -> FastAPI:
    """Build the API around ``storage`` (a fresh MemStorage by default)."""
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(title="EduConnect API", version=__version__, debug=settings.DEBUG)
    app.state.storage = storage if storage is not None else MemStorage()

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://0.0.0.0:8000",
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routers
    app.include_router(auth.router)          # /auth/*
    app.include_router(users.router)         # /users/*
    app.include_router(course.router)        # /courses/*
    app.include_router(booking.router)       # /bookings/*
    app.include_router(review.router)        # /reviews/*
    app.include_router(notification.router)  # /notifications/*
    app.include_router(dashboard.router)     # /student/*, /tutor/*
    app.include_router(admin.router)         # /admin/*

    @app.get("/health")
    def health_check():
        return {
            "status": "healthy",
            "message": "EduConnect API is running",
            "version": __version__,
        }

    @app.get("/debug/routes")
    def list_routes():
        """List all registered routes for debugging."""
        routes = []
        for route in app.routes:
            if hasattr(route, "methods"):
                routes.append({
                    "path": route.path,
                    "methods": sorted(route.methods),
                    "name": route.name,
                })
        return {"routes": routes}

    bootstrap_admin(app.state.storage)
    logger.info("EduConnect API ready (env=%s)", settings.APP_ENV)
    return app


app = create_app()
