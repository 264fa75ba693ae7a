"""Todo request and response schemas."""

from pydantic import BaseModel, Field, field_validator


class TodoBase(BaseModel):
    """Fields shared by todo schemas."""

    title: str = Field(..., min_length=1, max_length=500, description="Todo title")

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v


class TodoCreate(TodoBase):
    """POST /todos body. Only the title is accepted; completed starts false."""


class TodoUpdate(BaseModel):
    """PATCH /todos/<id> body. Omitted fields are left unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    completed: bool | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("title", "completed")
    @classmethod
    def reject_explicit_null(cls, v, info):
        # Validators only run for provided fields, so None here was sent as null
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class TodoResponse(BaseModel):
    """Todo as returned by the API."""

    id: str
    title: str
    completed: bool
    created_at: str
    owner_id: str
