import json
import logging

from quillmarket.extensions import db
from quillmarket.models.user import User
from quillmarket.models.writer_quiz import WriterQuiz
from quillmarket.models.enums import UserRole, ApprovalStatus
from quillmarket.utils.exceptions import NotFoundError, ServiceError

logger = logging.getLogger(__name__)


def get_writer(writer_id):
    writer = db.session.get(User, writer_id)
    if not writer or writer.role != UserRole.WRITER:
        raise NotFoundError(message="Writer not found")
    return writer


def set_writer_approval(writer_id, status, admin=None):
    status = ApprovalStatus(status)
    if status == ApprovalStatus.PENDING:
        raise ServiceError(code="VALIDATION_ERROR", message="Approval can only be set to approved or rejected")

    writer = get_writer(writer_id)
    previous = writer.approval_status
    writer.approval_status = status
    db.session.commit()

    logger.info(
        "Writer %s approval %s -> %s by %s",
        writer.id, previous.value, status.value, admin.id if admin else "system",
    )
    return writer


def submit_writer_quiz(writer, score, answers):
    if not isinstance(answers, str):
        answers = json.dumps(answers)

    quiz = WriterQuiz(writer_id=writer.id, score=score, answers=answers)
    db.session.add(quiz)
    db.session.commit()
    logger.info("Writer %s submitted quiz with score %d", writer.id, score)
    return quiz


def latest_quiz(writer_id):
    return (
        WriterQuiz.query
        .filter_by(writer_id=writer_id)
        .order_by(WriterQuiz.submitted_at.desc())
        .first()
    )


def list_writers(approval_status=None):
    q = User.query.filter(User.role == UserRole.WRITER)
    if approval_status:
        try:
            q = q.filter(User.approval_status == ApprovalStatus(approval_status))
        except ValueError:
            raise ServiceError(code="VALIDATION_ERROR", message=f"Unknown approval status '{approval_status}'")
    return q.order_by(User.created_at.desc()).all()
