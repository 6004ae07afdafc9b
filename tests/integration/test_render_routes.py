"""Integration tests for the render and health API routes."""

from dataclasses import replace

import pytest

from scheduler_renderer.services import CatalogStringLookup

pytestmark = pytest.mark.integration

SCHEDULER = {
    "id": 1,
    "cmid": 42,
    "course_id": 7,
    "name": "Office hours",
    "scale": 10,
    "teacher_name": "Tutor",
}
TEACHER = {"id": 2, "firstname": "Ada", "lastname": "Lovelace"}
STUDENT = {"id": 3, "firstname": "Bob", "lastname": "Student"}


def student_list(**overrides):
    payload = {
        "scheduler": SCHEDULER,
        "students": [{"entry_id": 5, "user": STUDENT, "grade": 7}],
        "show_grades": True,
    }
    payload.update(overrides)
    return payload


def slot(slot_id, start="2026-03-02T09:00:00Z", end="2026-03-02T09:30:00Z", **extra):
    return {"slot_id": slot_id, "start_time": start, "end_time": end, "teacher": TEACHER, **extra}


class TestAuthentication:
    """Tests for API key checks on render routes."""

    def test_missing_api_key(self, test_client):
        """Test requests without a key are rejected."""
        response = test_client.post("/api/render/action-message", json={"message": "Saved"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing API key"

    def test_invalid_api_key(self, test_client):
        """Test requests with a wrong key are rejected."""
        response = test_client.post(
            "/api/render/action-message",
            json={"message": "Saved"},
            headers={"Authorization": "Bearer wrong"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid API key"

    def test_health_is_public(self, test_client):
        """Test health checks need no key."""
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestFragmentFormats:
    """Tests for the JSON envelope and raw HTML responses."""

    def test_json_envelope(self, test_client, auth_headers):
        """Test fragments are returned with their JavaScript requirements."""
        response = test_client.post(
            "/api/render/action-message",
            json={"message": "Saved", "type": "success"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"html": '<div class="actionmessage success">Saved</div>', "js_modules": []}

    def test_raw_html(self, test_client, auth_headers):
        """Test format=html returns the bare fragment."""
        response = test_client.post(
            "/api/render/action-message?format=html",
            json={"message": "Saved"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.text == '<div class="actionmessage success">Saved</div>'

    def test_unknown_format(self, test_client, auth_headers):
        """Test only json and html formats are accepted."""
        response = test_client.post(
            "/api/render/action-message?format=xml",
            json={"message": "Saved"},
            headers=auth_headers,
        )

        assert response.status_code == 422

    def test_invalid_view_model(self, test_client, auth_headers):
        """Test malformed view-models are rejected by validation."""
        response = test_client.post(
            "/api/render/slot-booker",
            json={"scheduler": SCHEDULER, "slots": [], "action_url": "/x", "max_select": -1},
            headers=auth_headers,
        )

        assert response.status_code == 422


class TestRenderRoutes:
    """Tests for each widget route."""

    def test_slot_table(self, test_client, auth_headers):
        """Test the slot table renders dates in the requested timezone."""
        payload = {
            "scheduler": SCHEDULER,
            "slots": [{"start_time": "2026-03-02T23:30:00Z", "end_time": "2026-03-03T00:00:00Z", "teacher": TEACHER}],
        }

        response = test_client.post("/api/render/slot-table?tz=Europe/Amsterdam", json=payload, headers=auth_headers)

        assert response.status_code == 200
        html = response.json()["html"]
        assert "Tuesday, 03 March 2026" in html
        assert "[12:30 AM - 01:00 AM]" in html

    def test_invalid_timezone(self, test_client, auth_headers):
        """Test an unknown tz returns a structured 422."""
        response = test_client.post(
            "/api/render/slot-table?tz=Mars/Base",
            json={"scheduler": SCHEDULER, "slots": []},
            headers=auth_headers,
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "INVALID_TIMEZONE"
        assert error["details"] == {"timezone": "Mars/Base"}

    def test_student_list_requirements(self, test_client, auth_headers):
        """Test expandable student lists return the toggle module call."""
        response = test_client.post(
            "/api/render/student-list",
            json=student_list(expandable=True),
            headers=auth_headers,
        )

        data = response.json()
        assert response.status_code == 200
        assert len(data["js_modules"]) == 1
        call = data["js_modules"][0]
        assert call["module"] == "mod_scheduler/studentlist"
        assert call["function"] == "init"
        toggle_id, expanded = call["args"]
        assert expanded is True
        assert f'id="list{toggle_id}"' in data["html"]

    def test_slot_booker_with_sesskey(self, test_client, auth_headers):
        """Test the disengage link uses the session key header."""
        payload = {
            "scheduler": SCHEDULER,
            "slots": [slot(11)],
            "action_url": "/mod/scheduler/view.php?id=42&what=savechoice",
            "can_disengage": True,
        }

        response = test_client.post(
            "/api/render/slot-booker",
            json=payload,
            headers={**auth_headers, "X-Scheduler-Sesskey": "abc123"},
        )

        assert response.status_code == 200
        assert "what=disengage&amp;id=42&amp;sesskey=abc123" in response.json()["html"]

    def test_slot_booker_missing_sesskey(self, test_client, auth_headers):
        """Test the disengage link cannot be rendered without a session key."""
        payload = {
            "scheduler": SCHEDULER,
            "slots": [slot(11)],
            "action_url": "/mod/scheduler/view.php?id=42",
            "can_disengage": True,
        }

        response = test_client.post("/api/render/slot-booker", json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SESSKEY_MISSING"

    def test_slot_booker_multi(self, test_client, auth_headers):
        """Test multi-style booking returns the choice limit module."""
        payload = {
            "scheduler": SCHEDULER,
            "slots": [slot(11), slot(12, "2026-03-02T10:00:00Z", "2026-03-02T10:30:00Z")],
            "style": "multi",
            "max_select": 1,
            "action_url": "/mod/scheduler/view.php?id=42",
        }

        response = test_client.post("/api/render/slot-booker", json=payload, headers=auth_headers)

        data = response.json()
        assert data["js_modules"] == [{"module": "mod_scheduler/limitchoices", "function": "init", "args": [1]}]
        assert 'name="slotcheck[12]"' in data["html"]

    def test_command_bar(self, test_client, auth_headers):
        """Test the command bar route."""
        payload = {
            "command_groups": [
                {
                    "title": "Create",
                    "buttons": [{"title": "Add slots", "actions": [{"label": "Add", "url": "/add"}]}],
                }
            ]
        }

        response = test_client.post("/api/render/command-bar?format=html", json=payload, headers=auth_headers)

        assert response.status_code == 200
        assert "<dt>Create</dt>" in response.text
        assert '<a href="/add">Add</a>' in response.text

    def test_slot_manager(self, test_client, auth_headers):
        """Test the slot manager returns its actions and the saveseen module."""
        payload = {
            "scheduler": SCHEDULER,
            "action_url": "/mod/scheduler/view.php?id=42",
            "slots": [slot(21, students=student_list(), editable=True, is_appointed=1)],
        }

        response = test_client.post("/api/render/slot-manager", json=payload, headers=auth_headers)

        data = response.json()
        assert response.status_code == 200
        assert "view.php?id=42&amp;what=deleteslot&amp;slotid=21" in data["html"]
        assert {"module": "mod_scheduler/saveseen", "function": "init", "args": [42]} in data["js_modules"]

    def test_scheduling_list(self, test_client, auth_headers):
        """Test the scheduling list route."""
        payload = {"lines": [{"name": "<b>Bob</b>", "extra_fields": ["<i>x</i>"]}]}

        response = test_client.post("/api/render/scheduling-list", json=payload, headers=auth_headers)

        html = response.json()["html"]
        assert "<b>Bob</b>" in html
        assert "&lt;i&gt;x&lt;/i&gt;" in html

    def test_teacher_tabs(self, test_client, auth_headers):
        """Test the teacher tabs route."""
        payload = {"scheduler": SCHEDULER, "base_url": "/mod/scheduler/view.php?id=42", "selected": "overall"}

        response = test_client.post("/api/render/teacher-tabs", json=payload, headers=auth_headers)

        html = response.json()["html"]
        assert "Breakdown per Tutor" in html
        assert "subtabs" in html

    def test_mod_intro(self, test_client, auth_headers):
        """Test the heading and intro route."""
        payload = {"scheduler": {**SCHEDULER, "intro": "Meet weekly", "intro_format": 2}}

        response = test_client.post("/api/render/mod-intro?format=html", json=payload, headers=auth_headers)

        assert response.text.startswith("<h2>Office hours</h2>")
        assert '<div class="text_to_html">Meet weekly</div>' in response.text


class TestGradeRoutes:
    """Tests for grade formatting routes."""

    @pytest.mark.parametrize(
        "grade,short,expected",
        [(7, False, "7/10"), (7, True, "(7/10)"), (None, False, "No grade"), (None, True, "")],
    )
    def test_grade(self, test_client, auth_headers, grade, short, expected):
        """Test grade formatting in long and short form."""
        response = test_client.post(
            "/api/render/grade",
            json={"scheduler": SCHEDULER, "grade": grade, "short": short},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"text": expected}

    def test_grading_choices(self, test_client, auth_headers):
        """Test grade chooser options keep "No grade" first."""
        response = test_client.post(
            "/api/render/grading-choices",
            json={**SCHEDULER, "scale": 2},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert list(response.json()["choices"].items()) == [("-1", "No grade"), ("0", "0"), ("1", "1"), ("2", "2")]


class TestHealthRoutes:
    """Tests for health endpoints."""

    def test_health(self, test_client):
        """Test basic health check."""
        response = test_client.get("/health")

        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data

    def test_readiness(self, test_client):
        """Test readiness reports templates and strings usable."""
        response = test_client.get("/health/ready")

        data = response.json()
        assert response.status_code == 200
        assert data["status"] == "healthy"
        assert data["checks"] == {"templates": "ok", "strings": "ok"}

    def test_readiness_incomplete_strings(self, test_client):
        """Test readiness fails when the host's strings cannot resolve known identifiers."""
        services = test_client.app.state.host_services
        test_client.app.state.host_services = replace(services, strings=CatalogStringLookup({}))

        response = test_client.get("/health/ready")

        data = response.json()
        assert response.status_code == 503
        assert data["status"] == "unhealthy"
        assert data["checks"]["strings"] == "incomplete"
