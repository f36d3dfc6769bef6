class TenantError(Exception):
    """Raised when a tenant lifecycle operation cannot be carried out"""
    pass
