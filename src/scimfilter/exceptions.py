from typing import Optional
from fastapi import HTTPException
from scimfilter.schemas.error import ErrorResponse


class SCIMException(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: Optional[str] = None,
        scim_type: Optional[str] = None,
    ):
        self.scim_type = scim_type
        super().__init__(
            status_code=status_code,
            detail=detail,
        )

    def to_error_response(self) -> ErrorResponse:
        return ErrorResponse(
            status=self.status_code,
            detail=self.detail,
            scim_type=self.scim_type
        )


class InvalidFilter(SCIMException):
    def __init__(self, filter_expression: str, reason: str):
        self.filter_expression = filter_expression
        self.reason = reason
        super().__init__(
            status_code=400,
            detail=f"Invalid filter expression '{filter_expression}': {reason}",
            scim_type="invalidFilter"
        )


class InvalidFilterSyntax(InvalidFilter):
    """Raised by the tokenizer and parser for malformed filter strings.

    ``position`` is the offset into the filter string of the offending
    token, or None when the failure is not tied to a position.
    """

    def __init__(self, filter_expression: str, reason: str, position: Optional[int] = None):
        self.position = position
        super().__init__(filter_expression, reason)


class InvalidPath(SCIMException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=400,
            detail=detail,
            scim_type="invalidPath"
        )


class InvalidValue(SCIMException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=400,
            detail=detail,
            scim_type="invalidValue"
        )
