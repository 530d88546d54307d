from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from enums.app_role import AppRole
from models.userRole import UserRole, UserRoleDTO


class UserRoleRepository:
    @staticmethod
    async def create(user_role_dto: UserRoleDTO, session: AsyncSession) -> None:
        session.add(UserRole(**user_role_dto.model_dump(exclude_none=True)))
        await session.flush()

    @staticmethod
    async def has_role(user_id: str, role: AppRole, session: AsyncSession) -> bool:
        stmt = select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == role)
        user_role = await session.execute(stmt)
        return user_role.scalar() is not None
