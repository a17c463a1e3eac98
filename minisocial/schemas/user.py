"""Pydantic schemas for `User` domain objects."""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from .base import APIModel


class ProfileInfo(APIModel):
	first_name: Optional[str] = Field(None, max_length=50)
	last_name: Optional[str] = Field(None, max_length=50)
	bio: Optional[str] = Field(None, max_length=500)


class UserPublic(APIModel):
	"""Author/liker shape embedded in other responses."""
	id: int = Field(..., alias="_id")
	username: str
	profile_info: ProfileInfo

	@classmethod
	def from_user(cls, user) -> "UserPublic":
		return cls(
			id=user.id,
			username=user.username,
			profile_info=ProfileInfo(
				first_name=user.first_name,
				last_name=user.last_name,
				bio=user.bio,
			),
		)


class UserResponse(UserPublic):
	email: str
	is_active: bool
	created_at: Optional[datetime] = None
	updated_at: Optional[datetime] = None

	@classmethod
	def from_user(cls, user) -> "UserResponse":
		public = UserPublic.from_user(user)
		return cls(
			**public.model_dump(),
			email=user.email,
			is_active=user.is_active,
			created_at=user.created_at,
			updated_at=user.updated_at,
		)


class UserCreate(APIModel):
	username: str = Field(..., min_length=3, max_length=20)
	email: EmailStr = Field(..., max_length=255)
	password: str = Field(..., min_length=6)
	first_name: Optional[str] = Field(None, max_length=50)
	last_name: Optional[str] = Field(None, max_length=50)

	@field_validator("username", mode="before")
	@classmethod
	def strip_username(cls, v):
		return v.strip() if isinstance(v, str) else v

	@field_validator("email")
	@classmethod
	def normalize_email(cls, v: str) -> str:
		return v.lower()

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"username": "alice",
			"email": "alice@example.com",
			"password": "s3cretpw",
			"firstName": "Alice",
			"lastName": "Liddell",
		}
	})


class UserLogin(APIModel):
	"""Login by email or username."""
	identifier: str = Field(..., min_length=1)
	password: str = Field(..., min_length=1)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"identifier": "alice@example.com",
			"password": "s3cretpw",
		}
	})


class AuthResponse(APIModel):
	message: str
	token: str
	user: UserResponse


class ProfileResponse(APIModel):
	message: str
	user: UserResponse


class PublicProfileResponse(APIModel):
	message: str
	user: UserPublic
