from datetime import UTC, datetime
from typing import Any

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from app.utils.auth import BCRYPT_MAX_PASSWORD_BYTES

_url_adapter = TypeAdapter(AnyUrl)


class CamelModel(BaseModel):
    """Reads and writes camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


def _check_password_length(v: str) -> str:
    if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(
            f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long"
        )
    return v


def _check_url(v: str) -> str:
    v = v.strip()
    try:
        _url_adapter.validate_python(v)
    except PydanticValidationError as e:
        raise ValueError("URL must be a valid URL") from e
    return v


def _check_title(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Title must not be empty")
    return v


def _as_utc(v: datetime | None) -> datetime | None:
    # SQLite returns naive values; every stored timestamp is UTC
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=UTC)
    return v


# ===== Users =====


class UserRegister(CamelModel):
    username: str = Field(
        ..., min_length=3, max_length=50, description="Username for the new account"
    )
    email: EmailStr = Field(..., description="Email address for the new account")
    password: str = Field(
        ..., min_length=6, description="Password for the new account"
    )

    check_password_length = field_validator("password")(_check_password_length)


class UserLogin(CamelModel):
    username: str = Field(..., min_length=3, description="Username for login")
    password: str = Field(..., min_length=6, description="Password for login")


class UserInfo(CamelModel):
    id: int = Field(..., description="User unique identifier")
    username: str = Field(..., description="Username")
    email: str | None = Field(None, description="Email address")
    is_admin: bool = Field(False, description="Whether the user is an admin")
    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: datetime | None = Field(None, description="Last profile change")

    as_utc = field_validator("created_at", "updated_at")(_as_utc)


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")


# ===== Bookmarks =====


class BookmarkCreate(CamelModel):
    title: str = Field(..., min_length=1, description="Display title")
    url: str = Field(..., min_length=1, description="Link target")
    description: str | None = Field(None, description="Optional notes")
    is_public: bool = Field(False, description="Show in the public feed")

    check_title = field_validator("title")(_check_title)
    check_url = field_validator("url")(_check_url)


class BookmarkUpdate(CamelModel):
    """Partial update. Only fields present in the request body are applied."""

    title: str | None = Field(None, min_length=1)
    url: str | None = Field(None, min_length=1)
    description: str | None = None
    is_public: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def reject_null_required_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for name in ("title", "url", "isPublic", "is_public"):
                if name in data and data[name] is None:
                    raise ValueError(f"{name} cannot be null")
        return data

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str | None:
        return _check_title(v) if v is not None else v

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str | None) -> str | None:
        return _check_url(v) if v is not None else v


class BookmarkResponse(CamelModel):
    id: int
    user_id: int
    title: str
    url: str
    description: str | None = None
    is_public: bool
    created_at: datetime
    username: str | None = Field(None, description="Owner's username")

    as_utc = field_validator("created_at")(_as_utc)


class BookmarkListResponse(CamelModel):
    items: list[BookmarkResponse]
    total: int
    page: int
    limit: int
    total_pages: int


# ===== API tokens =====


class ApiTokenCreate(CamelModel):
    label: str | None = Field(None, max_length=100, description="Human label")


class ApiTokenResponse(CamelModel):
    id: int
    user_id: int
    token: str
    label: str | None = None
    created_at: datetime

    as_utc = field_validator("created_at")(_as_utc)


# ===== Admin =====


class AdminLogin(CamelModel):
    password: str = Field(..., description="Admin master password")


class AdminPasswordChange(CamelModel):
    current_password: str = Field(..., description="Current admin master password")
    new_password: str = Field(..., min_length=6, description="New admin master password")

    check_password_length = field_validator("new_password")(_check_password_length)
