"""Mutations that require cache invalidation."""

from enum import Enum


class Mutation(str, Enum):
    """Every write the services perform against the store."""

    CREATE_USER = "create_user"
    CREATE_PROJECT = "create_project"
    UPDATE_PROJECT = "update_project"
    DELETE_PROJECT = "delete_project"
    ADD_PROJECT_MEMBER = "add_project_member"
    REMOVE_PROJECT_MEMBER = "remove_project_member"
    CREATE_TASK = "create_task"
    UPDATE_TASK = "update_task"
    DELETE_TASK = "delete_task"
    ASSIGN_TASK = "assign_task"
    UNASSIGN_TASK = "unassign_task"
