from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from evalsys.core.config import settings
from evalsys.db.session import get_db

router = APIRouter(tags=["health"])


@router.get("/")
def root():
    return {
        "name": "Evaluation Rules Service",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
    }


@router.get("/health")
def health(db: Session = Depends(get_db)):
    # Simple DB ping
    db.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.APP_ENV}
