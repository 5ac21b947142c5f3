import re
from datetime import date, datetime
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from models.user_model import AccountType


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def check_password_strength(value: str) -> str:
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters long")
    if not re.search(r"[A-Z]", value):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[0-9]", value):
        raise ValueError("Password must contain at least one number")
    return value


StrongPassword = Annotated[str, AfterValidator(check_password_strength)]


class UserCreate(CamelModel):
    email: EmailStr
    password: StrongPassword
    first_name: str = Field(alias="firstname")
    last_name: str = Field(alias="lastname")
    birthday: Optional[date] = None
    gender: Optional[Literal["Male", "Female", "Other"]] = None
    phone: Optional[str] = Field(default=None, pattern=r"^\+?[0-9 ()-]{7,20}$")
    city: Optional[str] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def name_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    @field_validator("city")
    @classmethod
    def city_length(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if len(value) < 2:
            raise ValueError("City must be at least 2 characters")
        return value


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserOut(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    birthday: Optional[date] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    account_type: Optional[AccountType] = None
    is_verified: bool
    created_at: datetime


class UserSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    account_type: Optional[AccountType] = None


class EmailRequest(CamelModel):
    email: EmailStr


class ResetPasswordForm(CamelModel):
    password: StrongPassword


class ChangePasswordForm(CamelModel):
    old_password: str = Field(min_length=1)
    new_password: StrongPassword
    confirm_password: Optional[str] = None

    @model_validator(mode="after")
    def passwords_match(self):
        if self.confirm_password is not None and self.confirm_password != self.new_password:
            raise ValueError("Passwords do not match")
        return self


class GoogleLoginRequest(CamelModel):
    id_token: Optional[str] = None


class AccountTypeUpdate(CamelModel):
    # checked by the service so a bad value maps to InvalidAccountType
    account_type: Optional[str] = None


class AuthenticatedUser(BaseModel):
    """Principal produced by the auth dependency and handed to handlers by value."""

    id: int
    email: str
    account_type: Optional[AccountType] = None

    model_config = ConfigDict(frozen=True)
