# Authentication & access control module

from app.modules.auth.dependencies import (
    get_storage,
    get_settings,
    get_current_user,
    get_optional_user,
    authorize,
)
from app.modules.auth.policy import (
    AccessContext,
    Ownership,
    Rule,
    POLICIES,
    get_rule,
)

__all__ = [
    # Dependencies
    "get_storage",
    "get_settings",
    "get_current_user",
    "get_optional_user",
    "authorize",
    # Policy table
    "AccessContext",
    "Ownership",
    "Rule",
    "POLICIES",
    "get_rule",
]
