"""
main.py

FastAPI application entry point.

Loaded first when the server starts; wires configuration and routers
together and holds no business logic.

Main roles:
- logging setup
- FastAPI app instance, CORS middleware
- error envelope handlers ({"success": false, "message": ...})
- /api routers (auth, users, publications, theses, mastersis, actus,
  hero, carousel, presentation, stats)
- uploaded images served from UPLOAD_DIR on /uploads
- health and database checks

Related files:
- app.core.config        : environment settings
- app.core.errors        : exception handlers
- app.core.deps          : DB session dependency
- app.routers.*          : per-resource API routers

"""

from pathlib import Path

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.core.config import settings
from app.core.deps import get_db
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.routers import (
    actus,
    auth,
    carousel,
    hero,
    presentation,
    publications,
    stats,
    theses,
    users,
)
from app.services.uploads import URL_PREFIX

setup_logging()

app = FastAPI(title="LABTIM Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(publications.router)
app.include_router(theses.theses_router)
app.include_router(theses.mastersis_router)
app.include_router(actus.router)
app.include_router(hero.router)
app.include_router(carousel.router)
app.include_router(presentation.router)
app.include_router(stats.router)

Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

"""
Server health check

- confirms the application process is up
- used by load balancers / deployment probes

"""
@app.get("/health")
def health():
    return {"status": "ok"}

"""
Database connectivity check

- runs SELECT 1 to tell "server up, database down" apart

"""
@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    value = db.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "value": value}
