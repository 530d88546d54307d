from enum import Enum


class BotEntity(Enum):
    ADMIN = "admin"
    USER = "user"
    COMMON = "common"
