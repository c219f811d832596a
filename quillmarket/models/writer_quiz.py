from quillmarket.extensions import db
from datetime import datetime
import uuid


def gen_quiz_id():
    return f"QZ-{uuid.uuid4().hex[:10]}"


class WriterQuiz(db.Model):
    __tablename__ = "writer_quizzes"

    id = db.Column(db.String(50), primary_key=True, default=gen_quiz_id)
    writer_id = db.Column(db.String(50), db.ForeignKey("users.id"), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False)
    # JSON-encoded answer sheet
    answers = db.Column(db.Text, nullable=False)
    submitted_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    writer = db.relationship("User", backref=db.backref("quizzes", lazy=True))
