from .error_handler import scim_exception_handler, register_exception_handlers

__all__ = [
    "scim_exception_handler",
    "register_exception_handlers",
]
