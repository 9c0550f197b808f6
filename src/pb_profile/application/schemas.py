# src/pb_profile/application/schemas.py
from datetime import datetime

from pydantic import BaseModel

from src.pb_profile.domain.models import Profile

# Required fields are validated by the service so a missing value is a 400
# with the profile error body rather than FastAPI's 422.


class CreateProfileRequest(BaseModel):
    name: str | None = None
    auth_id: str | None = None


class UpdateProfileRequest(BaseModel):
    name: str | None = None


class DeleteProfileRequest(BaseModel):
    user_id: str | None = None


class ProfileOut(BaseModel):
    """Public view: no auth id."""

    id: int
    name: str
    created_at: datetime | None

    @classmethod
    def from_domain(cls, p: Profile) -> "ProfileOut":
        return cls(id=p.id, name=p.name, created_at=p.created_at)


class ProfileDetail(ProfileOut):
    auth_id: str
    name_change: int

    @classmethod
    def from_domain(cls, p: Profile) -> "ProfileDetail":
        return cls(
            id=p.id,
            name=p.name,
            created_at=p.created_at,
            auth_id=p.auth_id,
            name_change=p.name_change,
        )


class CheckUserResponse(BaseModel):
    exists: bool
    message: str


class DeleteProfileResponse(BaseModel):
    message: str = "Profile deleted successfully"
