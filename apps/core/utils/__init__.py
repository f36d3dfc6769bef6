# apps/core/utils/__init__.py
"""
Core utilities package
"""

from .tenant import (
    set_current_user,
    get_current_user,
    clear_user,
    user_context,
    get_current_schema,
)
