from quillmarket.extensions import db
from quillmarket.models.enums import UserRole, ApprovalStatus, enum_values
from datetime import datetime
from decimal import Decimal
import uuid


def gen_uuid(prefix=None):
    uid = str(uuid.uuid4())
    return f"{prefix}-{uid}" if prefix else uid


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(50), primary_key=True, default=lambda: gen_uuid("usr"))
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(UserRole, name="user_role", values_callable=enum_values),
        nullable=False,
        default=UserRole.WRITER,
    )
    bio = db.Column(db.Text, nullable=True)
    profile_image = db.Column(db.String(1024), nullable=True)
    balance = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    approval_status = db.Column(
        db.Enum(ApprovalStatus, name="approval_status", values_callable=enum_values),
        nullable=False,
        default=ApprovalStatus.PENDING,
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @property
    def is_approved(self):
        return self.approval_status == ApprovalStatus.APPROVED

    def __repr__(self):
        return f"<User {self.username} ({self.role.value})>"
