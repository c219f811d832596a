from quillmarket.extensions import db
from quillmarket.models.enums import JobStatus, enum_values
from datetime import datetime
import uuid


def gen_job_id():
    return f"JOB-{str(uuid.uuid4())[:8]}"


class Job(db.Model):
    __tablename__ = "jobs"

    __table_args__ = (
        db.Index("idx_jobs_status", "status"),
    )

    id = db.Column(db.String(50), primary_key=True, default=gen_job_id)
    client_id = db.Column(db.String(50), db.ForeignKey("users.id"), nullable=False, index=True)

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(120), nullable=False)
    budget = db.Column(db.Numeric(10, 2), nullable=False)

    # days allowed for delivery, counted from posting
    deadline = db.Column(db.Integer, nullable=False)
    pages = db.Column(db.Integer, nullable=True)

    # comma-joined file paths
    attachments = db.Column(db.Text, nullable=True)
    job_metadata = db.Column("metadata", db.JSON, default=dict)

    status = db.Column(
        db.Enum(JobStatus, name="job_status", values_callable=enum_values),
        nullable=False,
        default=JobStatus.OPEN,
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    client = db.relationship("User", backref=db.backref("jobs", lazy=True))

    @property
    def attachment_list(self):
        if not self.attachments:
            return []
        return [p for p in self.attachments.split(",") if p]
