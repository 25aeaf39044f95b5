# post_frontend/models/schemas.py
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from post_frontend.config import NAME_MAX_LENGTH, DESCRIPTION_MAX_LENGTH

SortOrder = Literal['asc', 'desc']


class Post(BaseModel):
    """A post record as returned by the backend API."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    description: str
    image_url: Optional[str] = Field(None, alias='imageUrl')
    # Kept as the server's ISO-8601 strings; parsed only for display.
    created_at: str = Field(..., alias='createdAt')
    updated_at: str = Field(..., alias='updatedAt')

    @property
    def was_edited(self) -> bool:
        return self.updated_at != self.created_at


class CreatePostDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    image_url: Optional[str] = Field(None, alias='imageUrl')

    def to_payload(self) -> dict:
        """JSON body in the backend's camelCase wire format."""
        return self.model_dump(by_alias=True)


class UpdatePostDto(CreatePostDto):
    pass
