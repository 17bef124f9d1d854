import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import app_settings

# Import routers
from app.api import activities, contacts, deals
from app.web import activities as activity_pages

logging.basicConfig(
    level=app_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=app_settings.app_name,
    description="Log calls, emails, meetings, notes and tasks against contacts and deals",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(activities.router, prefix="/api")
app.include_router(contacts.router, prefix="/api")
app.include_router(deals.router, prefix="/api")
app.include_router(activity_pages.router)


@app.get("/")
def read_root():
    return {
        "message": f"{app_settings.app_name} API",
        "status": "running",
        "version": "0.1.0",
        "activities": "/activities",
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
