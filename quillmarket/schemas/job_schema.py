from marshmallow import fields, validate, EXCLUDE, post_load, ValidationError
from decimal import Decimal

from quillmarket.extensions import ma
from quillmarket.models.enums import JobStatus

MIN_JOB_BUDGET = Decimal("10")


class AttachmentsField(fields.Field):
    """Accepts a list of paths or an already comma-joined string."""

    def _deserialize(self, value, attr, data, **kwargs):
        if value is None:
            return None
        if isinstance(value, str):
            paths = [p.strip() for p in value.split(",")]
        elif isinstance(value, list) and all(isinstance(p, str) for p in value):
            paths = [p.strip() for p in value]
        else:
            raise ValidationError("Attachments must be a list of paths or a comma-separated string")
        return [p for p in paths if p]


class ReferenceFileSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    path = fields.String(required=True)
    filename = fields.String()
    original_name = fields.String()
    size = fields.Integer()
    mime_type = fields.String()


class JobCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(required=True, validate=validate.Length(min=5, max=255))
    description = fields.String(required=True, validate=validate.Length(min=20))
    category = fields.String(required=True, validate=validate.Length(min=1, max=120))
    budget = fields.Decimal(
        required=True,
        places=2,
        validate=validate.Range(min=MIN_JOB_BUDGET, error="Budget must be at least 10"),
    )
    deadline = fields.Integer(
        required=True,
        strict=True,
        validate=validate.Range(min=1, error="Deadline must be at least 1 day"),
    )
    pages = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1))
    attachments = AttachmentsField(load_default=None, allow_none=True)
    reference_files = fields.List(fields.Nested(ReferenceFileSchema), load_default=list)
    metadata = fields.Dict(load_default=dict)

    @post_load
    def join_attachments(self, data, **kwargs):
        paths = [f["path"] for f in data["reference_files"]] or data.get("attachments") or []
        data["attachments"] = ",".join(paths) if paths else None
        return data


class JobSchema(ma.Schema):
    id = fields.String()
    client_id = fields.String()
    title = fields.String()
    description = fields.String()
    category = fields.String()
    budget = fields.Float()
    deadline = fields.Integer()
    pages = fields.Integer(allow_none=True)
    attachments = fields.List(fields.String(), attribute="attachment_list")
    metadata = fields.Dict(attribute="job_metadata")
    status = fields.Enum(JobStatus, by_value=True)
    created_at = fields.DateTime()


job_create_schema = JobCreateSchema()
job_schema = JobSchema()
jobs_schema = JobSchema(many=True)
