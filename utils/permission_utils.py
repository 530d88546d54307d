"""
Admin permission checks for the storefront admin panel.

Admin rights are rows of the user_roles table with role 'admin'. The
order status bot has its own operator check in utils/custom_filters.py.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_db_session
from enums.app_role import AppRole
from exceptions import AdminAccessDeniedException
from repositories.userRole import UserRoleRepository

logger = logging.getLogger(__name__)


async def is_admin_user(user_id: str | None, session: AsyncSession) -> bool:
    """
    Check if a storefront user holds the admin role.

    Returns:
        True if user is an admin, False for anonymous and ordinary users
    """
    if not user_id:
        return False
    return await UserRoleRepository.has_role(user_id, AppRole.ADMIN, session)


async def require_admin(user_id: str | None) -> None:
    """
    Guard for admin panel operations.

    A failed role lookup counts as "not an admin".

    Raises:
        AdminAccessDeniedException: user_id is missing or has no admin role
    """
    try:
        async with get_db_session() as session:
            is_admin = await is_admin_user(user_id, session)
    except SQLAlchemyError as e:
        logger.error(f"Error checking admin role of user {user_id}: {e}")
        is_admin = False

    if not is_admin:
        logger.warning(f"[Admin] Access denied for user {user_id}")
        raise AdminAccessDeniedException(user_id)
