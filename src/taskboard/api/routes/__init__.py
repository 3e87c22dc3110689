"""HTTP routers."""

from taskboard.api.routes import projects, system, tasks, users

__all__ = ["projects", "system", "tasks", "users"]
