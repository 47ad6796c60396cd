"""Post Schemas — Pydantic models for the post API boundary, shared with the client.

Invariants:
    - Timestamps are timezone-aware on the way in and ISO-8601 with offset on the way out
    - title and description are required (an empty string is a valid value)
    - title: at most TITLE_MAX_LENGTH characters, no control characters
    - updated >= created whenever both are present
    - PostPreview has the same fields as PostResponse (no reduction)

Design Decisions:
    - AwareDatetime rejects naive timestamps at validation time
    - field_validator delegates to core.domain_types.check_title: one rule for server and client
"""

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator, model_validator

from blog.core.domain_types import TITLE_MAX_LENGTH, check_title


class PostCreate(BaseModel):
    """Body of PUT /posts. updated is accepted but the store sets it to created."""
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str
    created: AwareDatetime
    updated: AwareDatetime | None = None

    @field_validator("title")
    @classmethod
    def reject_control_characters(cls, v: str) -> str:
        return check_title(v)

    @model_validator(mode="after")
    def validate_timestamps(self):
        if self.updated is not None and self.updated < self.created:
            raise ValueError("updated must not be earlier than created")
        return self


class PostUpdate(PostCreate):
    """Body of POST /posts/{id}."""
    updated: AwareDatetime


class PostResponse(BaseModel):
    """A post as returned by GET /posts/{id}."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    created: AwareDatetime
    updated: AwareDatetime


class PostPreview(PostResponse):
    """A post as returned in a page of GET /posts."""
