from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator

from bizcrm.utils.roles import RoleEnum
from .common import ManagerSummary


def normalize_email(value: str) -> str:
    value = (value or "").strip().lower()
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValueError("Invalid email address")
    return value


class ManagerBase(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    role: RoleEnum = RoleEnum.manager

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        return normalize_email(v)


class ManagerCreate(ManagerBase):
    password: str
    supervisor_ids: list[int] = []
    subordinate_ids: list[int] = []


class ManagerUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    role: RoleEnum | None = None
    password: str | None = None
    supervisor_ids: list[int] | None = None
    subordinate_ids: list[int] | None = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str | None) -> str | None:
        return normalize_email(v) if v is not None else None


class Manager(BaseModel):
    manager_id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class ManagerDetail(Manager):
    supervisors: list[ManagerSummary] = []
    subordinates: list[ManagerSummary] = []
