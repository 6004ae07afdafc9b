"""Renderer for scheduler widgets.

Each render method takes a view-model and returns an HTML fragment.
Strings, URLs, icons, user pictures, rich text and the session key all
come from the HostServices bundle the renderer is built with.
"""

import secrets
from collections.abc import Callable
from typing import Any

from markupsafe import Markup

from scheduler_renderer.config import Settings
from scheduler_renderer.exceptions import UnknownWidgetException
from scheduler_renderer.logging_config import get_logger, log_with_context
from scheduler_renderer.models.scheduler import SchedulerInfo, UserRef
from scheduler_renderer.models.widgets import (
    ActionMessage,
    CommandBar,
    CommandButton,
    ManagerSlot,
    ModIntro,
    SchedulingList,
    SlotBooker,
    SlotManager,
    SlotTable,
    StudentList,
    Tab,
    TeacherTabs,
)
from scheduler_renderer.protocols import HostServices
from scheduler_renderer.services.urls import query_params
from scheduler_renderer.views.date_labels import SlotTimeFormatter
from scheduler_renderer.views.requirements import (
    LIMITCHOICES_MODULE,
    SAVESEEN_MODULE,
    STUDENTLIST_MODULE,
    PageRequirements,
)
from scheduler_renderer.views.template_renderer import render_template

logger = get_logger(__name__)

VIEW_PATH = "/mod/scheduler/view.php"
NO_GRADE = -1


def random_id(base: str) -> str:
    """Return an element id unique within a page."""
    return f"{base}{secrets.token_hex(6)}"


class SchedulerRenderer:
    """Renders scheduler view-models into HTML fragments for one request."""

    def __init__(
        self,
        host: HostServices,
        settings: Settings,
        timezone: str | None = None,
        requirements: PageRequirements | None = None,
    ):
        """Initialize the renderer.

        Args:
            host: Host services used for strings, URLs, icons and users
            settings: Settings instance
            timezone: Viewer's IANA timezone (defaults to settings.timezone)
            requirements: Collector for JavaScript module calls

        Raises:
            InvalidTimezoneException: If timezone is unknown
        """
        self.host = host
        self.settings = settings
        self.requirements = requirements or PageRequirements()
        self.times = SlotTimeFormatter.from_settings(settings, timezone)
        self._widget_renderers: dict[type, Callable[[Any], Markup]] = {
            SlotTable: self.render_slot_table,
            StudentList: self.render_student_list,
            SlotBooker: self.render_slot_booker,
            CommandBar: self.render_command_bar,
            CommandButton: self.render_command_button,
            SlotManager: self.render_slot_manager,
            SchedulingList: self.render_scheduling_list,
            TeacherTabs: self.render_teacher_tabs,
            ModIntro: self.render_mod_intro,
            ActionMessage: self.render_action_message,
        }

    def render(self, widget: Any) -> Markup:
        """Render any supported view-model by dispatching on its type.

        Raises:
            UnknownWidgetException: If no render method handles the widget
        """
        renderer = self._widget_renderers.get(type(widget))
        if renderer is None:
            raise UnknownWidgetException(widget)
        log_with_context(logger, "debug", "Rendering widget", widget=type(widget).__name__, event_type="render")
        return renderer(widget)

    # Host service shortcuts

    def get_string(self, identifier: str, component: str | None = None, a: Any = None) -> str:
        return self.host.strings.get_string(identifier, component or self.settings.component, a)

    def pix_icon(
        self, name: str, alt: str, component: str = "moodle", attributes: dict[str, str] | None = None
    ) -> Markup:
        return self.host.icons.pix_icon(name, alt, component, attributes)

    def action_link(self, url: str, text: str) -> Markup:
        return Markup('<a href="{}">{}</a>').format(url, text)

    def action_icon(self, url: str, icon: Markup) -> Markup:
        return Markup('<a href="{}" class="action-icon">{}</a>').format(url, icon)

    def help_icon(self, identifier: str, component: str | None = None) -> Markup:
        """Help button linking to the ``<identifier>_help`` string."""
        component = component or self.settings.component
        title = self.get_string("helpprefix2", "moodle", self.get_string(identifier, component))
        url = self.host.urls.url(
            "/help.php",
            {"component": component, "identifier": identifier, "lang": self.settings.language},
        )
        return Markup('<a class="btn btn-link p-0 helplink" href="{}" title="{}" data-content="{}">{}</a>').format(
            url,
            title,
            self.get_string(f"{identifier}_help", component),
            self.pix_icon("help", title),
        )

    # Grades

    def format_grade(self, scheduler: SchedulerInfo, grade: int | None, short: bool = False) -> str:
        """Format a grade for display.

        Args:
            scheduler: The scheduler whose grading settings apply
            grade: The grade, None if not graded
            short: Short form: empty when there is no grade, otherwise
                the grade in parentheses

        Returns:
            The formatted grade
        """
        if scheduler.scale == 0 or grade is None:
            return "" if short else self.get_string("nograde", "moodle")

        if scheduler.scale > 0:
            result = f"{grade}/{scheduler.scale}"
        elif grade > 0:
            result = scheduler.scale_levels.get(grade, "")
        else:
            result = ""

        if short and result:
            result = f"({result})"
        return result

    def grading_choices(self, scheduler: SchedulerInfo) -> dict[int, str]:
        """Choices for a grade selector, "No grade" (key -1) first."""
        if scheduler.scale > 0:
            grades = {i: str(i) for i in range(scheduler.scale + 1)}
        else:
            grades = dict(scheduler.scale_levels)
        return {NO_GRADE: self.get_string("nograde", "moodle"), **grades}

    # Links

    def user_profile_link(self, scheduler: SchedulerInfo, user: UserRef) -> Markup:
        url = self.host.urls.url("/user/view.php", {"id": user.id, "course": scheduler.course_id})
        return self.action_link(url, self.host.users.fullname(user))

    def appointment_link(self, scheduler: SchedulerInfo, user: UserRef, appointment_id: int) -> Markup:
        url = self.host.urls.url(
            VIEW_PATH,
            {"what": "viewstudent", "id": scheduler.cmid, "appointmentid": appointment_id},
        )
        return self.action_link(url, self.host.users.fullname(user))

    # Page furniture

    def render_mod_intro(self, intro: ModIntro) -> Markup:
        scheduler = intro.scheduler
        description = None
        if Markup(scheduler.intro).striptags().strip():
            description = self.host.text.format_text(scheduler.intro, scheduler.intro_format, scheduler.context_id)
        return render_template("mod_intro.html", name=scheduler.name, intro=description)

    def _teacher_tab(self, base_url: str, name_key: str, what: str, subpage: str = "", name_args: Any = None) -> Tab:
        return Tab(
            id=subpage or what,
            url=self.host.urls.url(base_url, {"what": what, "subpage": subpage}),
            name=self.get_string(name_key, a=name_args),
        )

    def teacher_view_tabs(self, scheduler: SchedulerInfo, base_url: str) -> list[Tab]:
        """The first row of teacher tabs; statistics carries a subtree."""
        stats = self._teacher_tab(base_url, "statistics", "viewstatistics", "overall")
        stats.subtree = [
            self._teacher_tab(base_url, "overall", "viewstatistics", "overall"),
            self._teacher_tab(base_url, "studentbreakdown", "viewstatistics", "studentbreakdown"),
            self._teacher_tab(base_url, "staffbreakdown", "viewstatistics", "staffbreakdown", scheduler.teacher_name),
            self._teacher_tab(base_url, "lengthbreakdown", "viewstatistics", "lengthbreakdown"),
            self._teacher_tab(base_url, "groupbreakdown", "viewstatistics", "groupbreakdown"),
        ]
        return [
            self._teacher_tab(base_url, "myappointments", "view", "myappointments"),
            self._teacher_tab(base_url, "allappointments", "view", "allappointments"),
            self._teacher_tab(base_url, "datelist", "datelist"),
            stats,
            self._teacher_tab(base_url, "downloads", "downloads"),
        ]

    def render_tab_tree(self, tabs: list[Tab], selected: str, inactive: list[str] | None = None) -> Markup:
        """Render a row of tabs plus the subtabs of the active tab.

        A tab is active when it is selected or one of its subtabs is.
        The selected tab and inactive tabs are shown without a link.
        """
        inactive = set(inactive or [])

        def tab_context(tab: Tab) -> dict[str, Any]:
            is_selected = tab.id == selected
            active = is_selected or any(sub.id == selected for sub in tab.subtree)
            return {
                "name": tab.name,
                "url": tab.url,
                "active": active,
                "selected": is_selected,
                "inactive": tab.id in inactive,
            }

        row = [tab_context(tab) for tab in tabs]
        subtabs: list[dict[str, Any]] = []
        for tab, context in zip(tabs, row):
            if context["active"] and tab.subtree:
                subtabs = [tab_context(sub) for sub in tab.subtree]
                break

        return render_template("tabtree.html", tabs=row, subtabs=subtabs)

    def render_teacher_tabs(self, request: TeacherTabs) -> Markup:
        tabs = self.teacher_view_tabs(request.scheduler, request.base_url)
        return self.render_tab_tree(tabs, request.selected, request.inactive)

    def render_action_message(self, message: ActionMessage) -> Markup:
        return render_template("action_message.html", message=message.message, type=message.type)

    # Slot tables

    def render_slot_table(self, table: SlotTable) -> Markup:
        """Table of a student's own slots with notes and grades."""
        scheduler = table.scheduler
        head = [self.get_string("date"), scheduler.teacher_name, self.get_string("comments")]
        align = ["left", "center", "left"]
        if table.show_grades:
            head.append(self.get_string("grade"))
            align.append("left")

        rows = []
        for slot, labels in zip(table.slots, self.times.row_labels(table.slots)):
            slot_notes = appointment_notes = None
            if slot.slot_notes:
                slot_notes = self.host.text.format_text(slot.slot_notes, slot.slot_notes_format, scheduler.context_id)
            if slot.appointment_notes:
                appointment_notes = self.host.text.format_text(
                    slot.appointment_notes, slot.appointment_notes_format, scheduler.context_id
                )

            grade: Markup | str = ""
            if table.show_grades:
                if slot.other_students:
                    grade = self.render(slot.other_students)
                else:
                    grade = self.format_grade(scheduler, slot.grade)

            rows.append(
                {
                    "labels": labels,
                    "teacher": self.user_profile_link(scheduler, slot.teacher),
                    "slot_notes": slot_notes,
                    "appointment_notes": appointment_notes,
                    "grade": grade,
                }
            )

        return render_template(
            "slot_table.html",
            head=head,
            align=align,
            rows=rows,
            show_grades=table.show_grades,
            strings={
                "yourslotnotes": self.get_string("yourslotnotes"),
                "yourappointmentnote": self.get_string("yourappointmentnote"),
            },
        )

    def render_student_list(self, student_list: StudentList) -> Markup:
        """Compact list of students, optionally a checkbox form."""
        scheduler = student_list.scheduler
        toggle_id = random_id("toggle")

        toggle_icon = None
        if student_list.expandable and student_list.students:
            self.requirements.js_init_call(STUDENTLIST_MODULE, [toggle_id, student_list.expanded])
            toggle_icon = self.pix_icon(
                "t/switch",
                self.get_string("showparticipants"),
                "moodle",
                {"id": toggle_id, "class": "studentlist-togglebutton"},
            )

        editable = bool(student_list.action_url) and student_list.editable
        students = []
        for student in student_list.students:
            tick_icon = None
            if student_list.checkbox_name and not editable:
                tick = "ticked" if student.checked else "unticked"
                tick_icon = self.pix_icon(tick, "", self.settings.component, {"class": "statictickbox"})

            if student_list.link_appointment:
                name = self.appointment_link(scheduler, student.user, student.entry_id)
            else:
                name = self.host.users.fullname(student.user)

            grade = ""
            if student_list.show_grades and student.grade:
                grade = self.format_grade(scheduler, student.grade, short=True)

            students.append(
                {
                    "entry_id": student.entry_id,
                    "checked": student.checked,
                    "highlight": student.highlight,
                    "tick_icon": tick_icon,
                    "picture": self.host.users.user_picture(student.user, scheduler.course_id),
                    "name": name,
                    "grade": grade,
                }
            )

        return render_template(
            "student_list.html",
            toggle_id=toggle_id,
            toggle_icon=toggle_icon,
            students=students,
            editable=editable,
            action_url=student_list.action_url,
            checkbox_name=student_list.checkbox_name,
            button_text=student_list.button_text,
        )

    def render_slot_booker(self, booker: SlotBooker) -> Markup:
        """Booking form: one radio (or checkbox in multi style) per slot."""
        scheduler = booker.scheduler
        head = [
            self.get_string("date"),
            self.get_string("start"),
            self.get_string("end"),
            self.get_string("location"),
            self.get_string("choice"),
            scheduler.teacher_name,
            self.get_string("groupsession"),
        ]
        align = ["left", "left", "left", "left", "center", "left", "left"]
        complete = self.get_string("complete")

        rows = []
        for slot, labels in zip(booker.slots, self.times.row_labels(booker.slots)):
            rows.append(
                {
                    "slot": slot,
                    "labels": labels,
                    "teacher": self.user_profile_link(scheduler, slot.teacher),
                    "group_info": complete if slot.booked_by_me else slot.group_info,
                    "other_students": self.render(slot.other_students) if slot.other_students else "",
                }
            )

        multi = booker.style == "multi"
        if multi and booker.max_select > 0:
            self.requirements.js_init_call(LIMITCHOICES_MODULE, [booker.max_select])

        group_choices: list[tuple[int, str]] = []
        help_icon = None
        if booker.group_choice:
            choices = {**booker.group_choice, 0: self.get_string("appointsolo")}
            group_choices = sorted(choices.items())
            help_icon = self.help_icon("appointagroup")

        disengage_url = None
        if booker.can_disengage:
            disengage_url = self.host.urls.url(
                VIEW_PATH,
                {"what": "disengage", "id": scheduler.cmid, "sesskey": self.host.session.sesskey()},
            )

        return render_template(
            "slot_booker.html",
            action_url=booker.action_url,
            hidden_params=query_params(booker.action_url),
            head=head,
            align=align,
            rows=rows,
            multi=multi,
            group_choices=group_choices,
            help_icon=help_icon,
            disengage_url=disengage_url,
            strings={
                "appointfor": self.get_string("appointfor"),
                "savechoice": self.get_string("savechoice"),
                "disengage": self.get_string("disengage"),
            },
        )

    # Commands

    def render_command_button(self, button: CommandButton) -> Markup:
        actions = [
            {
                "label": action.label,
                "url": action.url,
                "icon": self.pix_icon(action.icon, "", action.icon_component) if action.icon else "",
            }
            for action in button.actions
        ]
        icon = self.pix_icon(button.icon, "") if button.icon else ""
        return render_template("command_button.html", title=button.title, icon=icon, actions=actions)

    def render_command_bar(self, command_bar: CommandBar) -> Markup:
        """Definition list of command groups; empty groups are skipped."""
        groups = [
            {"title": group.title, "buttons": [self.render(button) for button in group.buttons]}
            for group in command_bar.command_groups
            if group.buttons
        ]
        return render_template("command_bar.html", groups=groups)

    # Teacher slot management

    def _slot_actions(self, slot_manager: SlotManager, slot: ManagerSlot) -> list[Markup]:
        def action_url(what: str) -> str:
            return self.host.urls.url(slot_manager.action_url, {"what": what, "slotid": slot.slot_id})

        actions = []
        if slot.editable:
            delete = self.get_string("delete", "moodle")
            edit = self.get_string("edit", "moodle")
            actions.append(self.action_icon(action_url("deleteslot"), self.pix_icon("t/delete", delete)))
            actions.append(self.action_icon(action_url("updateslot"), self.pix_icon("t/edit", edit)))

        if slot.is_attended or slot.is_appointed > 1:
            group_icon = "i/groupevent"
        elif slot.exclusivity == 1:
            group_icon = "t/groupn"
        else:
            group_icon = "t/groupv"

        group_action = None
        if slot.is_attended:
            group_alt = "attended"
        elif slot.is_appointed > 1:
            group_alt = "isnonexclusive"
        else:
            group_alt = "allowgroup" if slot.exclusivity == 1 else "forbidgroup"
            if slot.editable:
                group_action = group_alt

        icon = self.pix_icon(group_icon, self.get_string(group_alt))
        actions.append(self.action_icon(action_url(group_action), icon) if group_action else icon)

        if slot.editable and slot.is_appointed:
            revoke = self.pix_icon("s/no", self.get_string("revoke"))
            actions.append(self.action_icon(action_url("revokeall"), revoke))

        return actions

    def render_slot_manager(self, slot_manager: SlotManager) -> Markup:
        """Teacher's table of slots with students and slot actions."""
        scheduler = slot_manager.scheduler
        self.requirements.js_init_call(SAVESEEN_MODULE, [scheduler.cmid])

        head = [
            "",
            self.get_string("date"),
            self.get_string("start"),
            self.get_string("end"),
            self.get_string("students"),
        ]
        align = ["center", "left", "left", "left", "left"]
        if slot_manager.show_teacher:
            head.append(scheduler.teacher_name)
            align.append("left")
        head.append(self.get_string("action"))
        align.append("center")

        rows = []
        for slot, labels in zip(slot_manager.slots, self.times.row_labels(slot_manager.slots)):
            rows.append(
                {
                    "slot": slot,
                    "labels": labels,
                    "students": self.render(slot.students),
                    "teacher": self.user_profile_link(scheduler, slot.teacher) if slot_manager.show_teacher else "",
                    "actions": self._slot_actions(slot_manager, slot),
                }
            )

        return render_template(
            "slot_manager.html",
            head=head,
            align=align,
            rows=rows,
            show_teacher=slot_manager.show_teacher,
        )

    def render_scheduling_list(self, scheduling_list: SchedulingList) -> Markup:
        """Table of students to schedule; pix, name and actions are host HTML."""
        head = ["", self.get_string("name", "moodle"), *scheduling_list.extra_headers, self.get_string("action")]
        align = ["center", "left", *(["left"] * len(scheduling_list.extra_headers)), "center"]

        lines = [
            {
                "pix": Markup(line.pix),
                "name": Markup(line.name),
                "extra_fields": line.extra_fields,
                "actions": [Markup(action) for action in line.actions],
            }
            for line in scheduling_list.lines
        ]
        return render_template("scheduling_list.html", head=head, align=align, lines=lines)
