from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileIn(BaseModel):
    display_name: Annotated[str, Field(
        min_length=1,
        max_length=128,
        description="Name printed in the report header.",
        examples=["Jane Doe"],
    )]

    @field_validator("display_name", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if not stripped:
            raise ValueError("display_name must not be empty after stripping whitespace")
        return stripped


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    owner: str
    display_name: str
