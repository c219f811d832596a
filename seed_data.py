"""Create the demo admin, writer and client accounts if they are missing."""

import logging

from quillmarket.main import create_app
from quillmarket.extensions import db
from quillmarket.models.user import User
from quillmarket.models.enums import UserRole, ApprovalStatus
from quillmarket.services.auth_service import register_user
from quillmarket.services.wallet_service import deposit
from quillmarket.utils.auth_utils import hash_password

logger = logging.getLogger("seed_data")

# -------------------------------------------------------------------
# CONFIG
# -------------------------------------------------------------------

ADMIN = {
    "username": "admin",
    "email": "admin@quillmarket.test",
    "password": "admin123",
    "full_name": "Admin User",
    "bio": "System Administrator",
}

DEMO_ACCOUNTS = [
    {
        "username": "writer",
        "email": "writer@quillmarket.test",
        "password": "writer123",
        "full_name": "Sample Writer",
        "role": UserRole.WRITER,
        "bio": "Experienced content writer specializing in technical documentation",
        "opening_balance": 100,
    },
    {
        "username": "client",
        "email": "client@quillmarket.test",
        "password": "client123",
        "full_name": "Sample Client",
        "role": UserRole.CLIENT,
        "bio": "Business owner looking for quality content",
        "opening_balance": 500,
    },
]


# -------------------------------------------------------------------
# MAIN LOGIC
# -------------------------------------------------------------------

def seed_admin():
    if User.query.filter_by(username=ADMIN["username"]).first():
        return None

    # admins cannot self-register, so the row is written directly
    admin = User(
        username=ADMIN["username"],
        email=ADMIN["email"],
        password_hash=hash_password(ADMIN["password"]),
        full_name=ADMIN["full_name"],
        bio=ADMIN["bio"],
        role=UserRole.ADMIN,
        approval_status=ApprovalStatus.APPROVED,
    )
    db.session.add(admin)
    db.session.commit()
    logger.info("Admin user created")
    return admin


def seed_account(account):
    if User.query.filter_by(username=account["username"]).first():
        return None

    user = register_user(
        username=account["username"],
        email=account["email"],
        password=account["password"],
        full_name=account["full_name"],
        role=account["role"],
        bio=account["bio"],
    )
    if user.role == UserRole.WRITER:
        user.approval_status = ApprovalStatus.APPROVED
        db.session.commit()

    deposit(user.id, account["opening_balance"])
    logger.info("%s user created", account["username"].capitalize())
    return user


def seed():
    created = [seed_admin()] + [seed_account(account) for account in DEMO_ACCOUNTS]
    logger.info("Seed data creation completed")
    return [u for u in created if u is not None]


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
        seed()
