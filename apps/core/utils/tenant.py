# apps/core/utils/tenant.py
import threading
from contextlib import contextmanager

from django.db import connection
from django_tenants.utils import get_public_schema_name

# Thread-local storage for the acting user
_thread_locals = threading.local()


def set_current_user(user):
    """
    Set the current user in thread-local storage
    """
    _thread_locals.user = user


def get_current_user():
    """
    Get the current user from thread-local storage
    """
    return getattr(_thread_locals, 'user', None)


def clear_user():
    """
    Clear user from thread-local storage
    """
    if hasattr(_thread_locals, 'user'):
        delattr(_thread_locals, 'user')


@contextmanager
def user_context(user):
    """
    Context manager for temporary user switching
    """
    old_user = get_current_user()
    set_current_user(user)
    try:
        yield
    finally:
        set_current_user(old_user)


def get_current_schema():
    """
    Schema the default connection currently points to
    """
    return getattr(connection, 'schema_name', None) or get_public_schema_name()
