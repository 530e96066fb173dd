from typing import Any

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt

# Booleans and numeric strings are rejected; the domain id is a JSON number.
DomainId = StrictInt | StrictFloat


class MirroredDocument(BaseModel):
    """Base class for records mirrored from the placeholder API.

    Documents are stored verbatim, so unknown fields are kept and every field
    besides ``id`` is optional.
    """

    model_config = ConfigDict(extra="allow")

    id: DomainId

    def to_document(self) -> dict[str, Any]:
        """Dump the fields that were actually provided, extras included."""
        return self.model_dump(mode="json", exclude_unset=True)
