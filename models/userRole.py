import uuid

from pydantic import BaseModel
from sqlalchemy import Column, String, UniqueConstraint, Enum as SQLEnum

from enums.app_role import AppRole
from models.base import Base


class UserRole(Base):
    __tablename__ = 'user_roles'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Storefront account id; accounts themselves live in the auth provider
    user_id = Column(String(36), nullable=False, index=True)
    role = Column(SQLEnum(AppRole, values_callable=lambda e: [c.value for c in e]), nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'role', name='uq_user_role'),
    )


class UserRoleDTO(BaseModel):
    id: str | None = None
    user_id: str
    role: AppRole
