from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, AliasChoices, field_validator
from typing import Optional
from datetime import datetime, timezone


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC, convert aware ones to UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class LinkRecord(BaseModel):
    """A stored short link. ``click_count`` only ever grows."""

    code: str
    target_url: str
    created_at: datetime
    expires_at: Optional[datetime] = None
    password_hash: Optional[str] = None
    password_protected: bool = False
    click_count: int = Field(0, ge=0)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "expires_at")
    @classmethod
    def _normalise_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    def is_expired(self, now: datetime) -> bool:
        """Expired only when ``expires_at`` is strictly before ``now``"""
        return self.expires_at is not None and self.expires_at < as_utc(now)


class LinkCreate(BaseModel):
    """Creation request; camelCase keys are accepted too"""

    url: str = Field(..., description="The destination URL to shorten")
    custom_code: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("custom_code", "customCode"),
        description="Use this code verbatim instead of a generated one",
    )
    expiration_date: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("expiration_date", "expirationDate"),
        description="After this instant the link resolves as expired",
    )
    password: Optional[str] = Field(None, description="Require this password to follow the link")


class LinkResponse(BaseModel):
    """Created link as returned to clients (the password hash never leaves the service)"""

    code: str
    short_url: str
    target_url: str
    created_at: datetime
    expires_at: Optional[datetime] = None
    password_protected: bool
    click_count: int


class LinkStats(BaseModel):
    code: str
    target_url: str
    click_count: int
    created_at: datetime
    expires_at: Optional[datetime] = None
    password_protected: bool

    model_config = ConfigDict(from_attributes=True)


class PasswordSubmit(BaseModel):
    password: Optional[str] = None


class ResolveIntent(str, Enum):
    """PROBE: look without committing. COMMIT: follow the link and count the click."""
    PROBE = "probe"
    COMMIT = "commit"


class ResolveStatus(str, Enum):
    REDIRECT = "redirect"
    PASSWORD_REQUIRED = "password_required"


class ResolveResult(BaseModel):
    code: str
    status: ResolveStatus
    target_url: Optional[str] = None
    click_count: Optional[int] = None

    @property
    def requires_password(self) -> bool:
        return self.status == ResolveStatus.PASSWORD_REQUIRED


class ResolveResponse(BaseModel):
    code: str
    requires_password: bool = False
    original_url: Optional[str] = None
    redirect_to: Optional[str] = None

    @classmethod
    def from_result(cls, result: ResolveResult) -> "ResolveResponse":
        return cls(
            code=result.code,
            requires_password=result.requires_password,
            original_url=result.target_url,
            redirect_to=result.target_url,
        )
