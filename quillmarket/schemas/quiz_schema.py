from marshmallow import fields, validate, EXCLUDE

from quillmarket.extensions import ma


class WriterQuizCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    score = fields.Integer(required=True, strict=True, validate=validate.Range(min=0, max=100))
    answers = fields.Raw(required=True)


class WriterQuizSchema(ma.Schema):
    id = fields.String()
    writer_id = fields.String()
    score = fields.Integer()
    answers = fields.String()
    submitted_at = fields.DateTime()


writer_quiz_create_schema = WriterQuizCreateSchema()
writer_quiz_schema = WriterQuizSchema()
