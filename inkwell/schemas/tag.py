"""Schemas for tags."""

from pydantic import BaseModel, Field, field_validator


class TagIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class TagOut(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    slug: str


class TagWithCount(TagOut):
    article_count: int = Field(description="Published articles carrying this tag")


class TagsListResponse(BaseModel):
    tags: list[TagWithCount]
