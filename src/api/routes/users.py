"""
User routes.

Owners and admins may read or update a profile; listing, creating and
deleting users is admin only.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_booking_app, get_current_identity, require_admin
from src.api.schemas import UserCreateRequest, UserSchema, UserUpdateRequest
from src.flight_booking.application.flight_booking_app import FlightBookingApp
from src.flight_booking.schemas.user import Identity

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserSchema)
def get_current_user(
    identity: Identity = Depends(get_current_identity),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    return booking_app.users.get_current_user(identity)


@router.get("", response_model=List[UserSchema])
def list_users(
    identity: Identity = Depends(require_admin),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    return booking_app.users.list_users(identity)


@router.get("/{user_id}", response_model=UserSchema)
def get_user(
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    return booking_app.users.get_user(user_id, identity)


@router.post("", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreateRequest,
    identity: Identity = Depends(require_admin),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    return booking_app.users.create_user(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        actor=identity,
        role=body.role,
        user_id=body.id,
    )


@router.put("/{user_id}", response_model=UserSchema)
def update_user(
    user_id: str,
    body: UserUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    changes = body.model_dump(exclude_none=True)
    return booking_app.users.update_user(user_id, changes, identity)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    identity: Identity = Depends(require_admin),
    booking_app: FlightBookingApp = Depends(get_booking_app),
):
    booking_app.users.delete_user(user_id, identity)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
