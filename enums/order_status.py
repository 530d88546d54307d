from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"          # New order, nobody has looked at it yet
    PROCESSING = "processing"    # Being baked / prepared
    COMPLETED = "completed"      # Handed over to the customer
    CANCELLED = "cancelled"
