"""Scheduler Renderer"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("scheduler-renderer")
except PackageNotFoundError:
    __version__ = "dev"
