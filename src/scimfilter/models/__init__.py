from .resource import ScimResource

__all__ = [
    "ScimResource",
]
