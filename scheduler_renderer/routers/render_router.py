"""Render API routes returning HTML fragments as JSON or raw HTML."""

from typing import Literal

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from markupsafe import Markup
from slowapi import Limiter
from slowapi.util import get_remote_address

from scheduler_renderer.dependencies import get_renderer
from scheduler_renderer.models import (
    ActionMessage,
    CommandBar,
    ErrorResponse,
    GradeRequest,
    GradeText,
    GradingChoices,
    ModIntro,
    RenderedFragment,
    SchedulerInfo,
    SchedulingList,
    SlotBooker,
    SlotManager,
    SlotTable,
    StudentList,
    TeacherTabs,
)
from scheduler_renderer.security import verify_api_key
from scheduler_renderer.views.scheduler_renderer import SchedulerRenderer

router = APIRouter(
    dependencies=[Depends(verify_api_key)],
    responses={
        400: {"model": ErrorResponse, "description": "View-model cannot be rendered"},
        401: {"description": "Unauthorized - missing or invalid API key"},
        422: {"description": "Invalid view-model or timezone"},
    },
)
limiter = Limiter(key_func=get_remote_address)

RENDER_LIMIT = "120/minute"


def fragment_response(renderer: SchedulerRenderer, html: Markup, format: str):
    """Wrap rendered markup in the requested response format.

    The JSON envelope carries the JavaScript modules the fragment needs;
    the raw HTML form is for hosts that do not use client-side modules.
    """
    if format == "html":
        return HTMLResponse(content=str(html))
    return RenderedFragment(html=str(html), js_modules=renderer.requirements.calls)


@router.post("/slot-table", summary="Render a student's slot table")
@limiter.limit(RENDER_LIMIT)
async def slot_table(
    request: Request,
    table: SlotTable,
    renderer: SchedulerRenderer = Depends(get_renderer),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Render the table of slots a student has booked, with notes and grades."""
    return fragment_response(renderer, renderer.render_slot_table(table), format)


@router.post("/student-list", summary="Render a student list")
@limiter.limit(RENDER_LIMIT)
async def student_list(
    request: Request,
    students: StudentList,
    renderer: SchedulerRenderer = Depends(get_renderer),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Render a compact student list, optionally as a checkbox form."""
    return fragment_response(renderer, renderer.render_student_list(students), format)


@router.post(
    "/slot-booker",
    summary="Render the booking form",
    description="""
    Renders the form a student uses to pick slots.

    When `can_disengage` is set the `X-Scheduler-Sesskey` header is
    required, since the disengage link carries the session key.
    """,
)
@limiter.limit(RENDER_LIMIT)
async def slot_booker(
    request: Request,
    booker: SlotBooker,
    renderer: SchedulerRenderer = Depends(get_renderer),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Render the slot booking form."""
    return fragment_response(renderer, renderer.render_slot_booker(booker), format)


@router.post("/command-bar", summary="Render the command bar")
@limiter.limit(RENDER_LIMIT)
async def command_bar(
    request: Request,
    bar: CommandBar,
    renderer: SchedulerRenderer = Depends(get_renderer),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Render grouped command buttons."""
    return fragment_response(renderer, renderer.render_command_bar(bar), format)


@router.post("/slot-manager", summary="Render the teacher's slot manager")
@limiter.limit(RENDER_LIMIT)
async def slot_manager(
    request: Request,
    manager: SlotManager,
    renderer: SchedulerRenderer = Depends(get_renderer),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Render the slot management table with per-slot actions."""
    return fragment_response(renderer, renderer.render_slot_manager(manager), format)


@router.post("/scheduling-list", summary="Render a scheduling list")
@limiter.limit(RENDER_LIMIT)
async def scheduling_list(
    request: Request,
    scheduling: SchedulingList,
    renderer: SchedulerRenderer = Depends(get_renderer),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Render the list of students still to be scheduled."""
    return fragment_response(renderer, renderer.render_scheduling_list(scheduling), format)


@router.post("/teacher-tabs", summary="Render teacher view tabs")
@limiter.limit(RENDER_LIMIT)
async def teacher_tabs(
    request: Request,
    tabs: TeacherTabs,
    renderer: SchedulerRenderer = Depends(get_renderer),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Render the teacher tab navigation with the selected tab highlighted."""
    return fragment_response(renderer, renderer.render_teacher_tabs(tabs), format)


@router.post("/mod-intro", summary="Render the activity heading and description")
@limiter.limit(RENDER_LIMIT)
async def mod_intro(
    request: Request,
    intro: ModIntro,
    renderer: SchedulerRenderer = Depends(get_renderer),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Render the scheduler name and its intro box."""
    return fragment_response(renderer, renderer.render_mod_intro(intro), format)


@router.post("/action-message", summary="Render an action status message")
@limiter.limit(RENDER_LIMIT)
async def action_message(
    request: Request,
    message: ActionMessage,
    renderer: SchedulerRenderer = Depends(get_renderer),
    format: Literal["json", "html"] = Query(default="json", description="Response format"),
):
    """Render a status message box."""
    return fragment_response(renderer, renderer.render_action_message(message), format)


@router.post("/grade", response_model=GradeText, summary="Format a grade")
@limiter.limit(RENDER_LIMIT)
async def grade(
    request: Request,
    grade_request: GradeRequest,
    renderer: SchedulerRenderer = Depends(get_renderer),
):
    """Format a grade in long or short form."""
    text = renderer.format_grade(grade_request.scheduler, grade_request.grade, short=grade_request.short)
    return GradeText(text=text)


@router.post("/grading-choices", response_model=GradingChoices, summary="List grade chooser options")
@limiter.limit(RENDER_LIMIT)
async def grading_choices(
    request: Request,
    scheduler: SchedulerInfo,
    renderer: SchedulerRenderer = Depends(get_renderer),
):
    """List grade options, "No grade" (-1) first."""
    return GradingChoices(choices=renderer.grading_choices(scheduler))
