# File: projector/schemas/project.py

from pydantic import BaseModel, Field, field_validator

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000


class ProjectBase(BaseModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        # a whitespace-only title counts as missing
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("description", mode="before")
    @classmethod
    def none_description_is_empty(cls, v):
        return "" if v is None else v


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(ProjectBase):
    """PUT body: replaces title and description, never the owner."""
    pass


class ProjectRead(BaseModel):
    id: str
    title: str
    description: str
    owner: str

    class Config:
        from_attributes = True


class DeleteResult(BaseModel):
    message: str = "ok"
