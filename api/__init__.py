from fastapi import APIRouter

from api.reviewer.routes import router as reviewer_router
from api.audit.routes import router as audit_router

api_router = APIRouter()

api_router.include_router(reviewer_router, prefix="/companies", tags=["reviewers"])
api_router.include_router(audit_router, prefix="/companies", tags=["audit"])
