import logging


class TenantContextFilter(logging.Filter):
    """
    Logging filter to add tenant context to log records
    """
    def filter(self, record):
        from apps.core.utils.tenant import get_current_schema

        try:
            record.tenant = get_current_schema()
        except Exception:
            record.tenant = 'unknown'

        return True
