"""API Validation Schemas."""

from marshmallow import EXCLUDE, Schema, fields, validate


class ReceiptTextSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    text = fields.Str(required=True)


class OCRParseRequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    image_id = fields.Str(required=True, validate=validate.Length(min=1))


class LineItemSchema(Schema):
    description = fields.Str()
    price = fields.Float()


class ExtractedReceiptSchema(Schema):
    """Serialized form of an ExtractedReceipt, as consumed by the upload form."""

    store_name = fields.Str()
    amount = fields.Float(allow_none=True)
    receipt_date = fields.Date(allow_none=True)
    suggested_category = fields.Str(attribute="category")
    line_items = fields.List(fields.Nested(LineItemSchema))
    raw_text = fields.Str()
    confidence = fields.Str(dump_only=True)
    confidence_scores = fields.Dict(keys=fields.Str(), values=fields.Float(), dump_only=True)


class CategorySchema(Schema):
    value = fields.Str(required=True)
    label = fields.Str()
    description = fields.Str()
    hsa_eligible = fields.Raw()
