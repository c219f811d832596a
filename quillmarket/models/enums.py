import enum


class UserRole(str, enum.Enum):
    WRITER = "writer"
    CLIENT = "client"
    ADMIN = "admin"


class ApprovalStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class JobStatus(str, enum.Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BidStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class OrderStatus(str, enum.Enum):
    IN_PROGRESS = "in_progress"
    REVISION = "revision"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TransactionType(str, enum.Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    PAYMENT = "payment"
    REFUND = "refund"


class PaymentMethod(str, enum.Enum):
    PAYPAL = "paypal"
    MPESA = "mpesa"
    BANK_TRANSFER = "bank_transfer"


def enum_values(enum_cls):
    return [member.value for member in enum_cls]
