from datetime import datetime
from pydantic import BaseModel, ConfigDict

from .common import ManagerSummary


class CommentFile(BaseModel):
    name: str | None = None
    type: str | None = None
    url: str | None = None


class CommentCreate(BaseModel):
    content: str | None = None
    file: CommentFile | None = None


class CommentUpdate(BaseModel):
    content: str | None = None
    file: CommentFile | None = None


class Comment(BaseModel):
    comment_id: int
    manager_id: int
    content: str
    file_name: str | None = None
    file_type: str | None = None
    file_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    manager: ManagerSummary | None = None
    model_config = ConfigDict(from_attributes=True)


class ProjectComment(Comment):
    project_id: int


class SubProjectComment(Comment):
    subproject_id: int
