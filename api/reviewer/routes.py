from fastapi import APIRouter, Depends, status

from api.reviewer.schemas import (
    EligibleReviewerResponse,
    MessageResponse,
    ReviewerCreate,
    ReviewerLevelUpdate,
    ReviewerMutationResponse,
    ReviewerReorder,
    ReviewerResponse,
)
from auth.dependencies import get_current_user_id
from services.reviewer_service import ReviewerRankEngine, get_reviewer_engine

router = APIRouter()


@router.get("/{company_id}/reviewers", response_model=list[ReviewerResponse])
def list_company_reviewers(
    company_id: str,
    user_id: str = Depends(get_current_user_id),
    engine: ReviewerRankEngine = Depends(get_reviewer_engine),
):
    """List reviewers of a company ordered by level."""
    return engine.list_reviewers(company_id, user_id)


@router.get("/{company_id}/reviewers/eligible", response_model=list[EligibleReviewerResponse])
def get_eligible_reviewers(
    company_id: str,
    user_id: str = Depends(get_current_user_id),
    engine: ReviewerRankEngine = Depends(get_reviewer_engine),
):
    """Active ADMIN and MANAGER users who are not reviewers yet."""
    return engine.get_eligible(company_id, user_id)


@router.post(
    "/{company_id}/reviewers",
    response_model=ReviewerMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_company_reviewer(
    company_id: str,
    data: ReviewerCreate,
    user_id: str = Depends(get_current_user_id),
    engine: ReviewerRankEngine = Depends(get_reviewer_engine),
):
    """Add a reviewer. An occupied level pushes existing reviewers up."""
    reviewer = engine.add_reviewer(company_id, data.company_user_id, data.reviewer_level, user_id)
    return {"success": True, "reviewer": reviewer}


@router.post("/{company_id}/reviewers/reorder", response_model=MessageResponse)
def reorder_reviewers(
    company_id: str,
    data: ReviewerReorder,
    strict: bool = False,
    user_id: str = Depends(get_current_user_id),
    engine: ReviewerRankEngine = Depends(get_reviewer_engine),
):
    """Bulk-assign levels. With strict=true the levels must be a permutation of 1..N."""
    engine.reorder(company_id, data.reviewers, user_id, strict=strict)
    return {"success": True, "message": "Reviewers reordered successfully"}


@router.patch("/{company_id}/reviewers/{reviewer_id}", response_model=ReviewerMutationResponse)
def update_reviewer_level(
    company_id: str,
    reviewer_id: str,
    data: ReviewerLevelUpdate,
    user_id: str = Depends(get_current_user_id),
    engine: ReviewerRankEngine = Depends(get_reviewer_engine),
):
    """Move a reviewer to another level."""
    reviewer = engine.update_level(company_id, reviewer_id, data.reviewer_level, user_id)
    return {"success": True, "reviewer": reviewer}


@router.delete("/{company_id}/reviewers/{reviewer_id}", response_model=MessageResponse)
def remove_company_reviewer(
    company_id: str,
    reviewer_id: str,
    user_id: str = Depends(get_current_user_id),
    engine: ReviewerRankEngine = Depends(get_reviewer_engine),
):
    """Remove a reviewer and close the gap in the chain."""
    engine.remove_reviewer(company_id, reviewer_id, user_id)
    return {"success": True, "message": "Reviewer removed successfully"}
