"""Pydantic models for the scheduler instance and its users."""

from enum import IntEnum

from pydantic import BaseModel, Field


class TextFormat(IntEnum):
    """Storage format of user-entered rich text."""

    MOODLE = 0
    HTML = 1
    PLAIN = 2
    MARKDOWN = 4


class UserRef(BaseModel):
    """A user as far as display is concerned."""

    id: int
    firstname: str = ""
    lastname: str = ""
    email: str | None = None
    picture: int = Field(default=0, ge=0, description="Stored picture id, 0 when the user has none")
    imagealt: str | None = None


class SchedulerInfo(BaseModel):
    """The scheduler activity a widget belongs to."""

    id: int
    cmid: int = Field(..., description="Course module id, used in view.php links")
    course_id: int
    context_id: int | None = None
    name: str
    intro: str = ""
    intro_format: TextFormat = TextFormat.HTML
    scale: int = Field(default=0, description="0: no grading, >0: maximum points, <0: id of a grading scale")
    scale_levels: dict[int, str] = Field(default_factory=dict, description="Scale level number to label")
    teacher_name: str = Field(default="Teacher", description="Display name of the teacher role")
