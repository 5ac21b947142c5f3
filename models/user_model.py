# models/user_model.py

import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Enum
from database import Base


class AccountType(str, enum.Enum):
    INDIVIDUAL = "Individual"
    BUSINESS = "Business"
    CREATOR = "Creator"
    NONE = "None"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # unique index is what closes the concurrent-register race
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False, default="")

    birthday = Column(Date, nullable=True)
    gender = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    city = Column(String, nullable=True)

    account_type = Column(
        Enum(AccountType, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=True,
    )

    is_verified = Column(Boolean, default=False, nullable=False)
    verification_token = Column(String, nullable=True, index=True)
    verification_token_expiry = Column(DateTime, nullable=True)
    reset_password_token = Column(String, nullable=True, index=True)
    reset_password_expiry = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
