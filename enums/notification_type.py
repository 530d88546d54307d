from enum import Enum


class NotificationType(Enum):
    SUCCESS = "✅"
    ERROR = "❌"
    INFO = "ℹ️"
