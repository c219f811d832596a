from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from quillmarket.extensions import db
from quillmarket.models.bid import Bid
from quillmarket.models.job import Job
from quillmarket.models.order import Order
from quillmarket.models.user import User
from quillmarket.models.enums import UserRole, BidStatus, JobStatus, OrderStatus
from quillmarket.services.bid_service import accept_bid
from quillmarket.utils.exceptions import ConflictError

from conftest import fresh

BID_PAYLOAD = {
    "amount": 90,
    "delivery_time": 5,
    "cover_letter": "Happy to take this on, I can start today.",
}


class TestPlaceBid:
    def test_approved_writer_bids_on_open_job(self, client, client_user, writer, make_job, auth):
        job = make_job(client_user)
        r = client.post("/api/bids", json=dict(BID_PAYLOAD, job_id=job.id), headers=auth(writer))
        assert r.status_code == 201
        bid = r.get_json()["bid"]
        assert bid["status"] == "pending"
        assert bid["writer_id"] == writer.id
        assert bid["amount"] == 90

    def test_unapproved_writer_is_forbidden(self, client, client_user, make_user, make_job, auth):
        pending = make_user(UserRole.WRITER, approved=False)
        job = make_job(client_user)
        r = client.post("/api/bids", json=dict(BID_PAYLOAD, job_id=job.id), headers=auth(pending))
        assert r.status_code == 403
        assert r.get_json()["error"]["code"] == "WRITER_NOT_APPROVED"

    def test_unapproved_writer_forbidden_even_on_missing_job(self, client, make_user, auth):
        pending = make_user(UserRole.WRITER, approved=False)
        r = client.post("/api/bids", json=dict(BID_PAYLOAD, job_id="JOB-nope"), headers=auth(pending))
        assert r.status_code == 403

    def test_job_must_be_open(self, client, client_user, writer, make_job, auth):
        job = make_job(client_user)
        job.status = JobStatus.CANCELLED
        db.session.commit()

        r = client.post("/api/bids", json=dict(BID_PAYLOAD, job_id=job.id), headers=auth(writer))
        assert r.status_code == 400
        assert r.get_json()["error"]["code"] == "JOB_NOT_OPEN"
        assert Bid.query.count() == 0

    def test_one_pending_bid_per_writer_per_job(self, client, client_user, writer, make_job, make_bid, auth):
        job = make_job(client_user)
        make_bid(writer, job)
        r = client.post("/api/bids", json=dict(BID_PAYLOAD, job_id=job.id), headers=auth(writer))
        assert r.status_code == 400
        assert r.get_json()["error"]["code"] == "DUPLICATE_BID"

    def test_clients_cannot_bid(self, client, client_user, make_job, auth):
        job = make_job(client_user)
        r = client.post("/api/bids", json=dict(BID_PAYLOAD, job_id=job.id), headers=auth(client_user))
        assert r.status_code == 403

    def test_delivery_time_must_be_whole_days(self, client, client_user, writer, make_job, auth):
        job = make_job(client_user)
        r = client.post(
            "/api/bids",
            json=dict(BID_PAYLOAD, job_id=job.id, delivery_time=0),
            headers=auth(writer),
        )
        assert r.status_code == 422


class TestAcceptBid:
    def test_accept_opens_order_and_rejects_siblings(self, client, client_user, make_user, make_job, make_bid, auth):
        job = make_job(client_user)
        chosen_writer = make_user(UserRole.WRITER)
        chosen = make_bid(chosen_writer, job, amount="90", delivery_time=5)
        other = make_bid(make_user(UserRole.WRITER), job, amount="80")
        before = datetime.utcnow()

        r = client.post(f"/api/bids/{chosen.id}/accept", headers=auth(client_user))
        assert r.status_code == 201
        order = r.get_json()["order"]
        assert order["amount"] == 90
        assert order["status"] == "in_progress"
        assert order["writer_id"] == chosen_writer.id
        assert order["client_id"] == client_user.id

        stored = Order.query.filter_by(bid_id=chosen.id).all()
        assert len(stored) == 1
        expected = before + timedelta(days=5)
        assert abs((stored[0].deadline - expected).total_seconds()) < 60

        assert fresh(Bid, chosen.id).status == BidStatus.ACCEPTED
        assert fresh(Bid, other.id).status == BidStatus.REJECTED
        assert fresh(Job, job.id).status == JobStatus.IN_PROGRESS

        # payment happens at completion, not acceptance
        assert fresh(User, chosen_writer.id).balance == Decimal("0")

    def test_second_acceptance_on_same_job_conflicts(self, client, client_user, make_user, make_job, make_bid, auth):
        job = make_job(client_user)
        first = make_bid(make_user(UserRole.WRITER), job)
        second = make_bid(make_user(UserRole.WRITER), job)

        assert client.post(f"/api/bids/{first.id}/accept", headers=auth(client_user)).status_code == 201
        r = client.post(f"/api/bids/{second.id}/accept", headers=auth(client_user))
        assert r.status_code == 409
        assert Order.query.filter_by(job_id=job.id).count() == 1

    def test_job_claimed_elsewhere_rolls_back(self, client_user, make_user, make_job, make_bid):
        job = make_job(client_user)
        bid = make_bid(make_user(UserRole.WRITER), job)

        # another request already moved the job on
        Job.query.filter_by(id=job.id).update({Job.status: JobStatus.IN_PROGRESS})
        db.session.commit()

        with pytest.raises(ConflictError) as exc:
            accept_bid(bid.id, client_user)
        assert exc.value.code == "ALREADY_ASSIGNED"
        assert fresh(Bid, bid.id).status == BidStatus.PENDING
        assert Order.query.count() == 0

    def test_only_job_owner_accepts(self, client, client_user, make_user, make_job, make_bid, auth):
        job = make_job(client_user)
        bid = make_bid(make_user(UserRole.WRITER), job)
        r = client.post(f"/api/bids/{bid.id}/accept", headers=auth(make_user(UserRole.CLIENT)))
        assert r.status_code == 403
        assert Order.query.count() == 0

    def test_missing_bid(self, client, client_user, auth):
        r = client.post("/api/bids/BID-missing/accept", headers=auth(client_user))
        assert r.status_code == 404

    def test_reject_bid(self, client, client_user, writer, make_job, make_bid, auth):
        job = make_job(client_user)
        bid = make_bid(writer, job)
        r = client.post(f"/api/bids/{bid.id}/reject", headers=auth(client_user))
        assert r.status_code == 200
        assert r.get_json()["bid"]["status"] == "rejected"
        assert fresh(Job, job.id).status == JobStatus.OPEN


class TestBidListings:
    def test_job_bids_include_writer_details(self, client, client_user, writer, make_job, make_bid, auth):
        job = make_job(client_user)
        make_bid(writer, job)

        r = client.get(f"/api/jobs/{job.id}/bids", headers=auth(client_user))
        assert r.status_code == 200
        bids = r.get_json()["bids"]
        assert bids[0]["writer_username"] == writer.username
        assert bids[0]["stats"] == {"completed_orders": 0, "active_orders": 0, "pending_bids": 1}

    def test_job_bids_hidden_from_other_clients(self, client, client_user, make_user, make_job, auth):
        job = make_job(client_user)
        r = client.get(f"/api/jobs/{job.id}/bids", headers=auth(make_user(UserRole.CLIENT)))
        assert r.status_code == 403

    def test_bids_dispatch_by_role(self, client, make_user, make_job, make_bid, admin, auth):
        c1, c2 = make_user(UserRole.CLIENT), make_user(UserRole.CLIENT)
        w1, w2 = make_user(UserRole.WRITER), make_user(UserRole.WRITER)
        make_bid(w1, make_job(c1))
        make_bid(w2, make_job(c2))
        make_bid(w1, make_job(c2))

        assert len(client.get("/api/bids", headers=auth(w1)).get_json()["bids"]) == 2
        assert len(client.get("/api/bids", headers=auth(c1)).get_json()["bids"]) == 1
        assert len(client.get("/api/bids", headers=auth(admin)).get_json()["bids"]) == 3

        grouped = client.get("/api/client/bids", headers=auth(c2)).get_json()["bids"]
        assert sum(len(v) for v in grouped.values()) == 2
        assert len(grouped) == 2

        writer_view = client.get("/api/writer/bids", headers=auth(w1)).get_json()["bids"]
        assert all("job_title" in b for b in writer_view)
