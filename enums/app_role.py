from enum import Enum


class AppRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
