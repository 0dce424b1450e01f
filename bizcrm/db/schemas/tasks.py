from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict

from .common import ManagerSummary, ProjectSummary, SubProjectSummary


class TaskStatus(str, Enum):
    new = "new"
    in_progress = "in_progress"
    blocked = "blocked"
    done = "done"
    cancelled = "cancelled"


TASK_STATUSES = tuple(s.value for s in TaskStatus)


class TaskBase(BaseModel):
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.new
    priority: str | None = None
    responsible_manager_id: int | None = None
    project_id: int | None = None
    subproject_id: int | None = None
    due_date: datetime | None = None


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: str | None = None
    responsible_manager_id: int | None = None
    project_id: int | None = None
    subproject_id: int | None = None
    due_date: datetime | None = None


class TaskStatusUpdate(BaseModel):
    status: str | None = None


class Task(BaseModel):
    task_id: int
    title: str
    description: str | None = None
    status: str
    priority: str | None = None
    responsible_manager_id: int | None = None
    creator_manager_id: int | None = None
    project_id: int | None = None
    subproject_id: int | None = None
    due_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    responsible_manager: ManagerSummary | None = None
    creator_manager: ManagerSummary | None = None
    model_config = ConfigDict(from_attributes=True)


class TaskDetail(Task):
    project: ProjectSummary | None = None
    subproject: SubProjectSummary | None = None
