"""Household API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_household_service
from src.models.user import User
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.household import (
    ActiveHouseholdResponse,
    HouseholdCreate,
    HouseholdResponse,
    HouseholdSummary,
    HouseholdUpdate,
    InviteCodeResponse,
    JoinHouseholdRequest,
)
from src.services.household_service import HouseholdService

router = APIRouter(prefix="/api/household", tags=["household"])


@router.post(
    "",
    response_model=ApiResponse[HouseholdResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_household(
    household_data: HouseholdCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Create a household; the caller becomes its owner."""
    household = service.create(current_user, household_data.name)
    return ApiResponse(
        data=HouseholdResponse.model_validate(household),
        message="Household created successfully",
    )


@router.get("", response_model=ApiResponse[ActiveHouseholdResponse])
def get_active_household(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """The active household with the caller's role, or null in personal mode."""
    active = service.get_active(current_user)
    if active is None:
        return ApiResponse(data=None)
    household, role = active
    data = HouseholdResponse.model_validate(household).model_dump()
    return ApiResponse(data=ActiveHouseholdResponse(**data, user_role=role))


@router.get("/all", response_model=ApiResponse[list[HouseholdSummary]])
def list_households(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Every household the caller belongs to."""
    summaries = service.list_for_user(current_user)
    return ApiResponse(data=[HouseholdSummary(**s) for s in summaries])


@router.post("/join", response_model=ApiResponse[HouseholdResponse])
def join_household(
    request: JoinHouseholdRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Join a household with an invite code."""
    household = service.join(current_user, request.invite_code)
    return ApiResponse(
        data=HouseholdResponse.model_validate(household),
        message=f'You have joined "{household.name}"',
    )


@router.post("/personal", response_model=MessageResponse)
def switch_to_personal(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Clear the active household."""
    service.clear_active(current_user)
    return MessageResponse(message="Switched to personal mode")


@router.put("/{household_id}", response_model=ApiResponse[HouseholdResponse])
def update_household(
    household_id: int,
    household_data: HouseholdUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Rename a household (owner only)."""
    household = service.rename(current_user, household_id, household_data.name)
    return ApiResponse(
        data=HouseholdResponse.model_validate(household), message="Household updated"
    )


@router.delete("/{household_id}", response_model=MessageResponse)
def delete_household(
    household_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Delete a household and its shared data (owner only)."""
    service.delete(current_user, household_id)
    return MessageResponse(message="Household deleted")


@router.post("/{household_id}/leave", response_model=MessageResponse)
def leave_household(
    household_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Leave a household."""
    service.leave(current_user, household_id)
    return MessageResponse(message="Left household successfully")


@router.delete(
    "/{household_id}/members/{member_id}",
    response_model=ApiResponse[HouseholdResponse],
)
def remove_member(
    household_id: int,
    member_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Remove another member (owner only)."""
    household = service.remove_member(current_user, household_id, member_id)
    return ApiResponse(
        data=HouseholdResponse.model_validate(household), message="Member removed"
    )


@router.post(
    "/{household_id}/regenerate-code",
    response_model=ApiResponse[InviteCodeResponse],
)
def regenerate_invite_code(
    household_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Replace the invite code (owner only)."""
    household = service.regenerate_invite_code(current_user, household_id)
    return ApiResponse(
        data=InviteCodeResponse(
            invite_code=household.invite_code,
            expires_at=household.invite_code_expires_at,
        ),
        message="Invite code regenerated",
    )


@router.put("/{household_id}/switch", response_model=ApiResponse[HouseholdResponse])
def switch_household(
    household_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[HouseholdService, Depends(get_household_service)],
):
    """Make a household the active one (members only)."""
    household = service.switch(current_user, household_id)
    return ApiResponse(
        data=HouseholdResponse.model_validate(household),
        message=f'Switched to "{household.name}"',
    )
