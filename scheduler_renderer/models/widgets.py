"""View-models for the renderable scheduler widgets.

These are built by the host per request and only need to be valid
enough to display. HTML-typed fields (``pix``, ``name`` and ``actions``
on scheduling lines) are trusted fragments produced by the host.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from scheduler_renderer.models.scheduler import SchedulerInfo, TextFormat, UserRef


class StudentEntry(BaseModel):
    """One student shown in a student list."""

    entry_id: int = Field(..., description="Appointment id")
    user: UserRef
    checked: bool = False
    highlight: bool = False
    grade: int | None = None


class StudentList(BaseModel):
    """A compact list of students, usually embedded in a table cell."""

    scheduler: SchedulerInfo
    students: list[StudentEntry] = Field(default_factory=list)
    expandable: bool = False
    expanded: bool = True
    action_url: str | None = None
    editable: bool = False
    checkbox_name: str = ""
    button_text: str = ""
    link_appointment: bool = False
    show_grades: bool = False


class SlotTableEntry(BaseModel):
    """A slot row in a student's own appointment table."""

    start_time: datetime
    end_time: datetime
    teacher: UserRef
    slot_notes: str = ""
    slot_notes_format: TextFormat = TextFormat.HTML
    appointment_notes: str = ""
    appointment_notes_format: TextFormat = TextFormat.HTML
    grade: int | None = None
    other_students: StudentList | None = None


class SlotTable(BaseModel):
    """Table of slots a student has booked."""

    scheduler: SchedulerInfo
    slots: list[SlotTableEntry] = Field(default_factory=list)
    show_grades: bool = False


class BookerSlot(BaseModel):
    """A slot offered for booking."""

    slot_id: int
    start_time: datetime
    end_time: datetime
    location: str = ""
    teacher: UserRef
    booked_by_me: bool = False
    group_info: str = ""
    other_students: StudentList | None = None


class SlotBooker(BaseModel):
    """Booking form listing the slots a student may choose from."""

    scheduler: SchedulerInfo
    slots: list[BookerSlot] = Field(default_factory=list)
    style: Literal["one", "multi"] = "one"
    max_select: int = Field(default=0, ge=0, description="Maximum selections in multi style, 0 for no limit")
    action_url: str
    group_choice: dict[int, str] = Field(default_factory=dict, description="Group id to group name")
    can_disengage: bool = False


class CommandAction(BaseModel):
    """A link inside a command button menu."""

    label: str
    url: str
    icon: str | None = None
    icon_component: str = "moodle"


class CommandButton(BaseModel):
    """A titled menu of actions."""

    title: str
    icon: str | None = None
    actions: list[CommandAction] = Field(default_factory=list)


class CommandGroup(BaseModel):
    """Buttons shown under one heading of the command bar."""

    title: str
    buttons: list[CommandButton] = Field(default_factory=list)


class CommandBar(BaseModel):
    """Bar of grouped commands above the teacher's slot list."""

    command_groups: list[CommandGroup] = Field(default_factory=list)


class ManagerSlot(BaseModel):
    """A slot row in the teacher's slot manager."""

    slot_id: int
    start_time: datetime
    end_time: datetime
    teacher: UserRef
    students: StudentList
    editable: bool = False
    is_attended: bool = False
    is_appointed: int = Field(default=0, ge=0, description="Number of appointments in the slot")
    exclusivity: int = Field(default=1, ge=0, description="Maximum students per slot, 0 for unlimited")


class SlotManager(BaseModel):
    """The teacher's slot management table."""

    scheduler: SchedulerInfo
    slots: list[ManagerSlot] = Field(default_factory=list)
    action_url: str
    show_teacher: bool = False


class SchedulingLine(BaseModel):
    """A student line in a scheduling list."""

    pix: str = ""
    name: str
    extra_fields: list[str] = Field(default_factory=list)
    actions: list[str] = Field(default_factory=list)


class SchedulingList(BaseModel):
    """Students still to be scheduled, with per-student actions."""

    extra_headers: list[str] = Field(default_factory=list)
    lines: list[SchedulingLine] = Field(default_factory=list)


class Tab(BaseModel):
    """A navigation tab, optionally with a row of subtabs."""

    id: str
    url: str
    name: str
    subtree: list["Tab"] = Field(default_factory=list)


class TeacherTabs(BaseModel):
    """Request for the teacher view tab navigation."""

    scheduler: SchedulerInfo
    base_url: str
    selected: str
    inactive: list[str] = Field(default_factory=list)


class ModIntro(BaseModel):
    """Request for the activity heading and description."""

    scheduler: SchedulerInfo


class ActionMessage(BaseModel):
    """A status message shown after an action."""

    message: str
    type: str = Field(default="success", pattern=r"^[A-Za-z0-9_-]+$")


class GradeRequest(BaseModel):
    """Request to format a single grade."""

    scheduler: SchedulerInfo
    grade: int | None = None
    short: bool = False
