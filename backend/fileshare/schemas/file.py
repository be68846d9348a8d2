"""File record and upload/delete request schemas."""
from typing import Any

from pydantic import ValidationError

from fileshare.schemas.base import CamelModel


class FileRecord(CamelModel):
    """Metadata for one uploaded blob. Serialized as-is into files.json.

    Unknown keys already in the document are kept so rewrites preserve them.
    """

    model_config = {"extra": "allow"}

    id: str
    name: str
    size: int = 0
    type: str | None = None
    upload_date: str | None = None
    author: Any = None
    author_id: Any = None
    author_color: Any = None
    filename: str
    path: str | None = None


class ClaimedIdentity(CamelModel):
    """Author identity as claimed by the client.

    Nothing here is verified. Values are kept verbatim so they round-trip
    into the record unchanged.
    """

    id: Any = None
    name: Any = None
    color: Any = None

    @classmethod
    def from_form(cls, raw: str | None) -> "ClaimedIdentity":
        """Parse the JSON-encoded ``user`` form field.

        Raises ValueError if the field is missing or is not a JSON object.
        """
        if raw is None:
            raise ValueError("user field is missing")
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise ValueError(f"user field is not a JSON object: {e.error_count()} error(s)") from e

    def owns(self, record: FileRecord) -> bool:
        """True if this identity is the record's author.

        Strict comparison: an identity that never stated an id owns nothing,
        values of different JSON types never match (``1`` does not own a
        record authored by ``"1"`` or ``true``), and objects or arrays never
        match, even with equal contents.
        """
        if "id" not in self.model_fields_set:
            return False
        if isinstance(self.id, (dict, list)) or isinstance(record.author_id, (dict, list)):
            return False
        return _json_type(self.id) == _json_type(record.author_id) and self.id == record.author_id


class DeleteRequest(CamelModel):
    user_id: Any = None


def _json_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__
