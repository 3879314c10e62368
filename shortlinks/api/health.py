from fastapi import APIRouter, Request

from shortlinks.db import database

router = APIRouter(tags=["health"])


# simple liveness
@router.get("/health")
def health_check():
    return {"status": "healthy", "service": "url-shortener"}


# readiness: check DB connectivity
@router.get("/ready")
def readiness(request: Request):
    db_ok = database.verify_database_connection(request.app.state.engine)
    return {"ready": db_ok, "details": {"db": "ok" if db_ok else "error"}}


@router.get("/test")
def smoke_test():
    return {"message": "Backend is working!"}
