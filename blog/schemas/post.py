from pydantic import BaseModel, Field, AnyUrl, TypeAdapter, ValidationError, field_validator
from typing import Optional

CONTENT_MAX_LENGTH = 4096
USER_MAX_LENGTH = 64

_url_adapter = TypeAdapter(AnyUrl)


class PostCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)
    user: str = Field(..., min_length=1, max_length=USER_MAX_LENGTH)
    avatar_url: Optional[str] = None

    @field_validator("avatar_url")
    @classmethod
    def avatar_url_is_well_formed(cls, value: Optional[str]) -> Optional[str]:
        # Syntax only, the source is contacted later by the fetcher
        if value is None:
            return value
        try:
            parsed = _url_adapter.validate_python(value)
        except ValidationError:
            raise ValueError("avatar_url is not a valid URL")
        if not parsed.host:
            raise ValueError("avatar_url must include a host")
        return value
