"""
Authorization policy for Academia.

The per-action role gates and the messaging rules are kept here as data so
they can be read and tested without going through the services.

``ACTION_POLICY`` maps ``(Role, Action)`` to the constraint the service
applies on top of the role gate. A missing key means the role may never
perform the action.
"""

from enum import Enum

from academia.core.roles import Role
from academia.core.roles import is_admin_tier


class Action(str, Enum):
    """Workflow actions gated by role."""

    SUBMIT_TITLE = "submit_title"
    REQUEST_TITLE = "request_title"
    REVIEW_TITLE = "review_title"
    VIEW_PROJECT_STATUS = "view_project_status"
    UPLOAD_FILE = "upload_file"
    DELETE_FILE = "delete_file"
    EVALUATE = "evaluate"
    ASSIGN_ADVISOR = "assign_advisor"
    VIEW_DEPARTMENT = "view_department"
    SEND_MESSAGE = "send_message"


class Constraint(str, Enum):
    """Entity-level check a service performs once the role gate passed."""

    NONE = "none"
    # InstructorStudentAssignment(instructor, student) must be active
    ROSTER = "roster"
    # Caller must be the project's student, or the file's uploader
    OWNER = "owner"
    # Caller must be the project's title-approval instructor
    PROJECT_INSTRUCTOR = "project_instructor"
    # Scoped to the caller's own department
    DEPARTMENT = "department"
    # Decided by can_message
    MESSAGING = "messaging"


ACTION_POLICY: dict[tuple[Role, Action], Constraint] = {
    (Role.STUDENT, Action.SUBMIT_TITLE): Constraint.ROSTER,
    (Role.STUDENT, Action.VIEW_PROJECT_STATUS): Constraint.OWNER,
    (Role.STUDENT, Action.UPLOAD_FILE): Constraint.OWNER,
    (Role.STUDENT, Action.DELETE_FILE): Constraint.OWNER,
    (Role.INSTRUCTOR, Action.REQUEST_TITLE): Constraint.ROSTER,
    (Role.INSTRUCTOR, Action.REVIEW_TITLE): Constraint.PROJECT_INSTRUCTOR,
    (Role.INSTRUCTOR, Action.EVALUATE): Constraint.ROSTER,
    (Role.DEPARTMENT_HEAD, Action.ASSIGN_ADVISOR): Constraint.DEPARTMENT,
    (Role.DEPARTMENT_HEAD, Action.VIEW_DEPARTMENT): Constraint.DEPARTMENT,
}
ACTION_POLICY.update({(role, Action.SEND_MESSAGE): Constraint.MESSAGING for role in Role})

# Unordered role pairs allowed to message each other inside one department.
MESSAGING_PAIRS = frozenset(
    {
        frozenset({Role.DEPARTMENT_HEAD, Role.INSTRUCTOR}),
        frozenset({Role.DEPARTMENT_HEAD, Role.STUDENT}),
        frozenset({Role.INSTRUCTOR, Role.STUDENT}),
    }
)


def is_action_allowed(role: Role | str | None, action: Action | str) -> bool:
    """Return True if the role passes the gate for the action."""
    if role is None:
        return False
    try:
        key = (Role(role), Action(action))
    except ValueError:
        return False
    return key in ACTION_POLICY


def allowed_actions(role: Role | str | None) -> list[Action]:
    """Actions the role passes the gate for, in declaration order."""
    return [action for action in Action if is_action_allowed(role, action)]


def constraint_for(role: Role | str, action: Action | str) -> Constraint | None:
    """Return the entity-level constraint for an allowed action, or None."""
    try:
        return ACTION_POLICY.get((Role(role), Action(action)))
    except ValueError:
        return None


def can_message(sender, receiver) -> bool:
    """
    Decide whether ``sender`` may message ``receiver``.

    Both arguments only need ``id``, ``role``, ``department_id`` and
    ``is_active`` attributes. The decision is symmetric.
    """
    if sender.id == receiver.id:
        return False

    if is_admin_tier(sender.role) or is_admin_tier(receiver.role):
        return True

    if not (sender.is_active and receiver.is_active):
        return False

    if sender.department_id is None or sender.department_id != receiver.department_id:
        return False

    try:
        pair = frozenset({Role(sender.role), Role(receiver.role)})
    except ValueError:
        return False
    return pair in MESSAGING_PAIRS


def messageable_roles(role: Role | str) -> frozenset[Role]:
    """Return the non-admin roles a user of ``role`` may message in their department."""
    role = Role(role)
    return frozenset(other for pair in MESSAGING_PAIRS if role in pair for other in pair if other != role)
