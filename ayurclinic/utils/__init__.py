from .decorators import require_role, get_current_user

from .audit import log_audit

from .pagination import page_args, paginated

__all__ = [
    # Decorators
    "require_role",
    "get_current_user",
    # Audit
    "log_audit",
    # Pagination
    "page_args",
    "paginated",
]
