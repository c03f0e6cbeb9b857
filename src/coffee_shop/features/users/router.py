"""API routes for user accounts: registration, login, role changes and profiles."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from ...common.schemas import GeneralResponse, envelope
from ..auth.gate import AuthContext
from ..auth.middleware import get_auth_context
from . import service as user_service
from .schemas import NewRole, UserLogin, UserRegister, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["Users"],
    prefix="/users",
)


@router.post("/register", response_model=GeneralResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user_in: UserRegister):
    await user_service.register_user(user_in)
    return envelope(status.HTTP_201_CREATED, "User registered successfully.")


@router.post("/login", response_model=GeneralResponse)
async def login(credentials: UserLogin):
    token = await user_service.login_user(credentials)
    return envelope(status.HTTP_200_OK, "User logged in successfully.", token)


@router.patch("/changeRole", response_model=GeneralResponse)
async def change_role(new_role: NewRole):
    user = await user_service.change_role(new_role)
    return envelope(status.HTTP_200_OK, "User role changed successfully.", user)


@router.get("", response_model=GeneralResponse)
async def get_all_users():
    users = await user_service.get_all_users()
    return envelope(status.HTTP_200_OK, "Users retrieved successfully.", users)


@router.get("/{user_id}", response_model=GeneralResponse)
async def get_user(user_id: int):
    user = await user_service.get_user_by_id(user_id)
    return envelope(status.HTTP_200_OK, "User retrieved successfully.", user)


@router.delete("/{user_id}", response_model=GeneralResponse)
async def delete_user(user_id: int):
    await user_service.delete_user(user_id)
    return envelope(status.HTTP_200_OK, "User deleted successfully.")


@router.put("/{user_id}", response_model=GeneralResponse)
async def update_user(
    user_id: int,
    user_in: UserUpdate,
    ctx: Annotated[AuthContext, Depends(get_auth_context)],
):
    user = await user_service.update_user(user_id, user_in, ctx)
    return envelope(status.HTTP_200_OK, "User details updated successfully.", user)
