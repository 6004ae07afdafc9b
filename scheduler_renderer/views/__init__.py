"""View rendering module for scheduler HTML fragments.

This module handles all HTML/template rendering logic, separate from API routers.
Views prepare context data from view-models and render Jinja2 templates.
"""

from scheduler_renderer.views.scheduler_renderer import SchedulerRenderer

__all__ = ["SchedulerRenderer"]
