"""Scheduler renderer models"""

from scheduler_renderer.models.base_models import (
    DetailedHealthResponse,
    ErrorResponse,
    GradeText,
    GradingChoices,
    HealthResponse,
    JsModuleCall,
    RenderedFragment,
)
from scheduler_renderer.models.scheduler import SchedulerInfo, TextFormat, UserRef
from scheduler_renderer.models.widgets import (
    ActionMessage,
    BookerSlot,
    CommandAction,
    CommandBar,
    CommandButton,
    CommandGroup,
    GradeRequest,
    ManagerSlot,
    ModIntro,
    SchedulingLine,
    SchedulingList,
    SlotBooker,
    SlotManager,
    SlotTable,
    SlotTableEntry,
    StudentEntry,
    StudentList,
    Tab,
    TeacherTabs,
)

__all__ = [
    "ActionMessage",
    "BookerSlot",
    "CommandAction",
    "CommandBar",
    "CommandButton",
    "CommandGroup",
    "DetailedHealthResponse",
    "ErrorResponse",
    "GradeRequest",
    "GradeText",
    "GradingChoices",
    "HealthResponse",
    "JsModuleCall",
    "ManagerSlot",
    "ModIntro",
    "RenderedFragment",
    "SchedulerInfo",
    "SchedulingLine",
    "SchedulingList",
    "SlotBooker",
    "SlotManager",
    "SlotTable",
    "SlotTableEntry",
    "StudentEntry",
    "StudentList",
    "Tab",
    "TeacherTabs",
    "TextFormat",
    "UserRef",
]
