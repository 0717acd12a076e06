"""
Access policy table.

Every endpoint is keyed by (resource, action). The rule for a key names the
roles allowed to call it and, optionally, an ownership predicate: a user
whose role is not in `privileged` must be the owner of the path id, body
field or stored row named by `field`.

Usage:
    @router.get("/{task_id}")
    async def get_task(ctx: AccessContext = Depends(authorize("tasks", "read"))):
        ...
        ctx.check_owner(task["assigned_to"])
"""
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

from pydantic.alias_generators import to_camel, to_snake

from app.core.exceptions import AuthorizationError
from app.core.logging_config import logger
from app.models.user import UserRole

ADMIN = UserRole.ADMIN
INSTRUCTOR = UserRole.INSTRUCTOR
STUDENT = UserRole.STUDENT
PROJECT_MANAGER = UserRole.PROJECT_MANAGER
EMPLOYEE = UserRole.EMPLOYEE
FINANCE = UserRole.FINANCE

# Where the owner id of an ownership predicate is read from
PATH = "path"
BODY = "body"
ROW = "row"


@dataclass(frozen=True)
class Ownership:
    field: str
    source: str = ROW
    privileged: FrozenSet[UserRole] = frozenset({ADMIN})
    # Fields a non-privileged owner may change; None means all of them
    editable_fields: Optional[FrozenSet[str]] = None


@dataclass(frozen=True)
class Rule:
    # None means any authenticated user
    roles: Optional[FrozenSet[UserRole]]
    ownership: Optional[Ownership] = None

    def allows(self, role: UserRole) -> bool:
        return self.roles is None or role in self.roles


def roles(*members: UserRole) -> FrozenSet[UserRole]:
    return frozenset(members)


AUTHENTICATED = None

LEARNING_STAFF = roles(ADMIN, INSTRUCTOR)
PROJECT_STAFF = roles(ADMIN, PROJECT_MANAGER)
FINANCE_STAFF = roles(ADMIN, FINANCE)
# finance follows enrollment payments
ENROLLMENT_STAFF = roles(ADMIN, INSTRUCTOR, FINANCE)


def _crud(
    list_roles=AUTHENTICATED,
    read_roles=AUTHENTICATED,
    create_roles=AUTHENTICATED,
    update_roles=AUTHENTICATED,
    delete_roles=AUTHENTICATED,
) -> Dict[str, Rule]:
    return {
        "list": Rule(list_roles),
        "read": Rule(read_roles),
        "create": Rule(create_roles),
        "update": Rule(update_roles),
        "delete": Rule(delete_roles),
    }


POLICIES: Dict[str, Dict[str, Rule]] = {
    "users": {
        "list": Rule(roles(ADMIN)),
        "read": Rule(AUTHENTICATED, Ownership("id")),
        "update": Rule(roles(ADMIN)),
        "delete": Rule(roles(ADMIN)),
    },
    # ---- learning ----
    "courses": _crud(
        create_roles=LEARNING_STAFF,
        update_roles=LEARNING_STAFF,
        delete_roles=roles(ADMIN),
    ),
    "course_contents": {
        **_crud(
            create_roles=LEARNING_STAFF,
            update_roles=LEARNING_STAFF,
            delete_roles=LEARNING_STAFF,
        ),
        "list_by_course": Rule(AUTHENTICATED),
    },
    "enrollments": {
        "list": Rule(ENROLLMENT_STAFF),
        "read": Rule(
            AUTHENTICATED,
            Ownership("student_id", privileged=ENROLLMENT_STAFF),
        ),
        "create": Rule(roles(ADMIN)),
        "update": Rule(roles(ADMIN, FINANCE)),
        "delete": Rule(roles(ADMIN)),
        "list_by_course": Rule(LEARNING_STAFF),
        "list_by_student": Rule(
            AUTHENTICATED,
            Ownership("student_id", source=PATH, privileged=ENROLLMENT_STAFF),
        ),
    },
    "quizzes": {
        **_crud(
            create_roles=LEARNING_STAFF,
            update_roles=LEARNING_STAFF,
            delete_roles=LEARNING_STAFF,
        ),
        "list_by_course": Rule(AUTHENTICATED),
    },
    "quiz_questions": {
        **_crud(
            create_roles=LEARNING_STAFF,
            update_roles=LEARNING_STAFF,
            delete_roles=LEARNING_STAFF,
        ),
        "list_by_quiz": Rule(AUTHENTICATED),
    },
    "quiz_results": {
        "list": Rule(LEARNING_STAFF),
        "read": Rule(AUTHENTICATED, Ownership("student_id", privileged=LEARNING_STAFF)),
        "create": Rule(
            AUTHENTICATED,
            Ownership("student_id", source=BODY, privileged=LEARNING_STAFF),
        ),
        "update": Rule(LEARNING_STAFF),
        "delete": Rule(LEARNING_STAFF),
        "list_by_quiz": Rule(LEARNING_STAFF),
        "list_by_student": Rule(
            AUTHENTICATED,
            Ownership("student_id", source=PATH, privileged=LEARNING_STAFF),
        ),
    },
    "comments": {
        "list": Rule(AUTHENTICATED),
        "read": Rule(AUTHENTICATED),
        "create": Rule(AUTHENTICATED, Ownership("user_id", source=BODY)),
        "update": Rule(AUTHENTICATED, Ownership("user_id")),
        "delete": Rule(AUTHENTICATED, Ownership("user_id")),
        "list_by_content": Rule(AUTHENTICATED),
    },
    # ---- projects ----
    "projects": {
        # employees get their own slice, see the projects endpoint
        "list": Rule(roles(ADMIN, PROJECT_MANAGER, FINANCE, EMPLOYEE)),
        "read": Rule(roles(ADMIN, PROJECT_MANAGER, FINANCE)),
        "create": Rule(PROJECT_STAFF),
        "update": Rule(PROJECT_STAFF),
        "delete": Rule(roles(ADMIN)),
        "list_by_manager": Rule(roles(ADMIN, PROJECT_MANAGER, FINANCE)),
    },
    "clients": _crud(
        list_roles=PROJECT_STAFF,
        read_roles=PROJECT_STAFF,
        create_roles=PROJECT_STAFF,
        update_roles=PROJECT_STAFF,
        delete_roles=PROJECT_STAFF,
    ),
    "milestones": {
        **_crud(
            create_roles=PROJECT_STAFF,
            update_roles=PROJECT_STAFF,
            delete_roles=PROJECT_STAFF,
        ),
        "list_by_project": Rule(AUTHENTICATED),
    },
    "tasks": {
        "list": Rule(PROJECT_STAFF),
        "read": Rule(AUTHENTICATED, Ownership("assigned_to", privileged=PROJECT_STAFF)),
        "create": Rule(PROJECT_STAFF),
        "update": Rule(
            AUTHENTICATED,
            Ownership(
                "assigned_to",
                privileged=PROJECT_STAFF,
                editable_fields=frozenset({"status"}),
            ),
        ),
        "delete": Rule(PROJECT_STAFF),
        "list_by_project": Rule(AUTHENTICATED),
        "list_by_milestone": Rule(AUTHENTICATED),
        "list_by_employee": Rule(
            AUTHENTICATED,
            Ownership("employee_id", source=PATH, privileged=PROJECT_STAFF),
        ),
    },
    # ---- finance ----
    "expenses": _crud(
        list_roles=FINANCE_STAFF,
        read_roles=FINANCE_STAFF,
        create_roles=FINANCE_STAFF,
        update_roles=FINANCE_STAFF,
        delete_roles=FINANCE_STAFF,
    ),
    "project_payments": {
        **_crud(
            list_roles=roles(ADMIN, FINANCE, PROJECT_MANAGER),
            read_roles=roles(ADMIN, FINANCE, PROJECT_MANAGER),
            create_roles=FINANCE_STAFF,
            update_roles=FINANCE_STAFF,
            delete_roles=FINANCE_STAFF,
        ),
        "list_by_project": Rule(roles(ADMIN, FINANCE, PROJECT_MANAGER)),
    },
    "reports": {
        "finance": Rule(FINANCE_STAFF),
        "overview": Rule(roles(ADMIN)),
    },
}


def get_rule(resource: str, action: str) -> Rule:
    """Look up a rule; unknown keys are a programming error"""
    try:
        return POLICIES[resource][action]
    except KeyError:
        raise KeyError(f"No access rule for {resource}.{action}")


def _role_value(role: Any) -> str:
    return getattr(role, "value", role)


def _as_id(value: Any) -> Any:
    """Integer form of a raw id; anything unparseable is returned as is"""
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return value
    return value


class AccessContext:
    """The authenticated user plus the rule that let them in"""

    def __init__(self, user: Dict[str, Any], resource: str, action: str, rule: Rule):
        self.user = user
        self.resource = resource
        self.action = action
        self.rule = rule

    @property
    def user_id(self) -> int:
        return self.user["id"]

    @property
    def role(self) -> UserRole:
        return self.user["role"]

    @property
    def is_privileged(self) -> bool:
        """True when ownership does not constrain this user"""
        ownership = self.rule.ownership
        return ownership is None or self.role in ownership.privileged

    def deny(self, reason: str) -> None:
        logger.log_access_denied(
            self.resource,
            self.action,
            _role_value(self.role),
            reason,
            user_id=self.user_id,
        )
        raise AuthorizationError()

    def check_role(self) -> None:
        if not self.rule.allows(self.role):
            self.deny("role not allowed")

    def check_owner(self, owner_id: Optional[int]) -> None:
        """Non-privileged users must own the targeted row"""
        if self.is_privileged:
            return
        if owner_id is None or owner_id != self.user_id:
            self.deny(f"not the owner ({self.rule.ownership.field})")

    def check_row(self, row: Dict[str, Any]) -> None:
        ownership = self.rule.ownership
        if ownership is not None and ownership.source == ROW:
            self.check_owner(row.get(ownership.field))

    def check_body(self, values: Dict[str, Any]) -> None:
        ownership = self.rule.ownership
        if ownership is not None and ownership.source == BODY:
            self.check_owner(values.get(ownership.field))

    def check_fields(self, fields: Iterable[str]) -> None:
        """Non-privileged owners may only change the editable fields"""
        if self.is_privileged:
            return
        editable = self.rule.ownership.editable_fields
        if editable is None:
            return
        blocked: Tuple[str, ...] = tuple(sorted(set(fields) - editable))
        if blocked:
            self.deny(f"fields not editable: {', '.join(blocked)}")

    def check_raw_body(self, payload: Any) -> None:
        """
        Body ownership and editable fields, read from the undecoded JSON.

        Runs before the typed body is validated, so a caller who fails
        ownership gets 403 whatever else is wrong with the payload. The
        handler repeats the checks on the validated values.
        """
        if self.is_privileged or not isinstance(payload, dict):
            return
        ownership = self.rule.ownership
        if ownership.source == BODY:
            owner = payload.get(to_camel(ownership.field), payload.get(ownership.field))
            if owner is not None:
                self.check_owner(_as_id(owner))
        self.check_fields(to_snake(key) for key in payload)
