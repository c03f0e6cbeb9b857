"""Business logic for user accounts: registration, login, roles and profiles."""
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from ...common.models import is_int_id
from ..auth.gate import AuthContext
from ..auth.security import create_access_token, get_password_hash, verify_password
from ..orders.models import Order, OrderItem
from .models import User
from .schemas import NewRole, Token, UserLogin, UserRegister, UserResponse, UserSummary, UserUpdate

logger = logging.getLogger(__name__)


def _user_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User does not exist.")


async def _get_user_or_404(user_id: int) -> User:
    user = await User.get_or_none(id=user_id) if is_int_id(user_id) else None
    if not user:
        raise _user_not_found()
    return user


async def get_user_by_email(email: str) -> Optional[User]:
    """Retrieves a user by their email address.

    Args:
        email: The email address of the user to retrieve.

    Returns:
        The User object if found, otherwise None.
    """
    return await User.get_or_none(email=email)


async def register_user(user_in: UserRegister) -> None:
    """Creates a USER account for a new email.

    Args:
        user_in: The email and plain text password of the new account.

    Raises:
        HTTPException: 400 if the email is already registered.
    """
    if await User.filter(email=user_in.email).exists():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists.")

    hashed_password = get_password_hash(user_in.password)
    try:
        await User.create(email=user_in.email, hashed_password=hashed_password)
    except Exception as e:
        logger.error(f"Register user failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error registering user: {e}",
        )
    logger.info(f"Registered user {user_in.email}")


async def login_user(credentials: UserLogin) -> Token:
    """Checks the credentials and issues a bearer token.

    Raises:
        HTTPException: 404 for an unknown email, 400 for a wrong password.
    """
    user = await get_user_by_email(credentials.email)
    if not user:
        raise _user_not_found()
    if not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials.")
    return Token(token=create_access_token(user.email, user.role.value))


async def change_role(new_role: NewRole) -> UserSummary:
    user = await get_user_by_email(new_role.email)
    if not user:
        raise _user_not_found()
    user.role = new_role.role
    try:
        await user.save()
    except Exception as e:
        logger.error(f"Changing role of {user.email} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error changing user role: {e}",
        )
    logger.info(f"Role of {user.email} changed to {user.role.value}")
    return UserSummary.model_validate(user)


async def get_all_users() -> List[UserSummary]:
    users = await User.all().order_by("id")
    return [UserSummary.model_validate(user) for user in users]


async def get_user_by_id(user_id: int) -> UserResponse:
    user = await _get_user_or_404(user_id)
    return UserResponse.model_validate(user)


async def delete_user(user_id: int) -> None:
    """Deletes a user together with every order they own.

    The order lines and orders are removed first, then the user, all inside
    one transaction.
    """
    user = await _get_user_or_404(user_id)
    try:
        async with in_transaction() as conn:
            order_ids = await Order.filter(user_id=user.id).using_db(conn).values_list("id", flat=True)
            if order_ids:
                await OrderItem.filter(order_id__in=order_ids).using_db(conn).delete()
                await Order.filter(id__in=order_ids).using_db(conn).delete()
            await user.delete(using_db=conn)
    except Exception as e:
        logger.error(f"Deleting user {user_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error deleting user: {e}",
        )
    logger.info(f"Deleted user {user.email} and {len(order_ids)} order(s)")


async def update_user(user_id: int, user_in: UserUpdate, ctx: AuthContext) -> UserResponse:
    """Applies a partial profile update to the caller's own account.

    Only fields present and not null in ``user_in`` overwrite stored values;
    a new password is hashed before it is stored.

    Raises:
        HTTPException: 403 when the caller is not the user being updated,
            400 when the new username or phone belongs to someone else.
    """
    user = await get_user_by_email(ctx.email) if ctx.email else None
    if user is None or user.id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not allowed to update other users.",
        )

    update_data = user_in.model_dump(exclude_none=True)
    password = update_data.pop("password", None)
    if password is not None:
        user.hashed_password = get_password_hash(password)
    for key, value in update_data.items():
        setattr(user, key, value)

    try:
        await user.save()
    except IntegrityError as e:
        logger.warning(f"Profile update for {user.email} conflicts: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username or phone is already in use.",
        )
    except Exception as e:
        logger.error(f"Updating user {user_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error updating user: {e}",
        )
    return UserResponse.model_validate(user)
