"""Pytest configuration and fixtures."""

import itertools
from decimal import Decimal

import pytest
from flask_jwt_extended import create_access_token

from quillmarket.main import create_app
from quillmarket.extensions import db
import quillmarket.models  # noqa: F401
from quillmarket.models.enums import UserRole, ApprovalStatus
from quillmarket.services.auth_service import register_user
from quillmarket.services.job_service import create_job
from quillmarket.services.bid_service import place_bid
from quillmarket.services.wallet_service import deposit


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth(app):
    def _auth(user):
        return {"Authorization": f"Bearer {create_access_token(identity=user.id)}"}
    return _auth


@pytest.fixture
def make_user(app):
    counter = itertools.count(1)

    def _make(role=UserRole.WRITER, approved=True, balance=0):
        n = next(counter)
        username = f"{role.value}{n}"
        user = register_user(
            username=username,
            email=f"{username}@example.com",
            password="secret123",
            full_name=f"{role.value.title()} {n}",
            role=role,
        )
        if role == UserRole.WRITER and approved:
            user.approval_status = ApprovalStatus.APPROVED
            db.session.commit()
        if balance:
            deposit(user.id, balance)
        return user

    return _make


@pytest.fixture
def writer(make_user):
    return make_user(UserRole.WRITER)


@pytest.fixture
def client_user(make_user):
    return make_user(UserRole.CLIENT)


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN)


@pytest.fixture
def make_job(app):
    def _make(owner, **overrides):
        data = {
            "title": "Blog post on renewable energy",
            "description": "A 1500 word article on solar adoption in small towns.",
            "category": "science",
            "budget": Decimal("100"),
            "deadline": 7,
            "pages": 3,
        }
        data.update(overrides)
        return create_job(owner, data)
    return _make


@pytest.fixture
def make_bid(app):
    def _make(bidder, job, amount="90", delivery_time=5):
        return place_bid(
            bidder,
            job_id=job.id,
            amount=Decimal(amount),
            delivery_time=delivery_time,
            cover_letter="I have written on this topic many times before.",
        )
    return _make


def fresh(model, obj_id):
    """Re-read a row, bypassing whatever the test session has cached."""
    db.session.expire_all()
    return db.session.get(model, obj_id)
