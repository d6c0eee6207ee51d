from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

NO_FILE_REFERENCE = "No file uploaded"

REQUIRED_FIELDS = ("Name", "Email", "CollegeName", "Location")

# str for a single form value, a list for repeated keys, any JSON value for JSON bodies
FieldValue = Any


class UploadedFile(BaseModel):
    """File part read from the inbound request."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class Submission(BaseModel):
    """One internship application built from a single form post."""

    fields: Dict[str, FieldValue] = Field(default_factory=dict)
    file_reference: str = NO_FILE_REFERENCE

    @property
    def name(self) -> Optional[FieldValue]:
        return self.fields.get("Name")

    @property
    def email(self) -> Optional[FieldValue]:
        return self.fields.get("Email")

    @property
    def college_name(self) -> Optional[FieldValue]:
        return self.fields.get("CollegeName")

    @property
    def location(self) -> Optional[FieldValue]:
        return self.fields.get("Location")

    def missing_fields(self) -> List[str]:
        """Required fields that are absent or empty, in declaration order."""
        required = dict(
            zip(REQUIRED_FIELDS, (self.name, self.email, self.college_name, self.location))
        )
        return [key for key, value in required.items() if not value]

    def pretty_fields(self) -> str:
        """Two-space indented JSON dump of every submitted field."""
        return json.dumps(self.fields, indent=2, ensure_ascii=False)
