from pydantic import BaseModel
from datetime import datetime
from typing import Any, Optional


class ReviewerCreate(BaseModel):
    # Checked by the service so a missing value is a 400, not a 422
    company_user_id: Optional[str] = None
    reviewer_level: Optional[int] = None


class ReviewerLevelUpdate(BaseModel):
    reviewer_level: Optional[int] = None


class ReviewerReorder(BaseModel):
    # List of {id, reviewer_level}; shape checked by the service (400, not 422)
    reviewers: Optional[Any] = None


class ReviewerResponse(BaseModel):
    id: str
    reviewer_level: int
    created_at: Optional[datetime] = None
    company_user_id: str
    user_id: str
    email: Optional[str] = None
    full_names: Optional[str] = None
    role: str
    status: str
    last_sign_in: Optional[datetime] = None


class ReviewerMutationResponse(BaseModel):
    success: bool
    reviewer: ReviewerResponse


class EligibleReviewerResponse(BaseModel):
    company_user_id: str
    user_id: str
    email: Optional[str] = None
    full_names: Optional[str] = None
    role: str
    status: str


class MessageResponse(BaseModel):
    success: bool
    message: str
