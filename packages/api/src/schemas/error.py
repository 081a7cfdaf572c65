# This project was developed with assistance from AI tools.
"""RFC 7807 Problem Details error response schema."""

from pydantic import BaseModel, Field

# Problem type URIs by status. Statuses not listed use "about:blank".
PROBLEM_TYPES: dict[int, str] = {
    401: "/problems/unauthenticated",
    403: "/problems/permission-denied",
    404: "/problems/not-found",
    409: "/problems/conflict",
    422: "/problems/invalid-request",
    503: "/problems/dependency-unavailable",
}

STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


class ErrorResponse(BaseModel):
    """Problem Details body returned for every error.

    A 403 always means the caller's role lacks a permission; out-of-scope
    records are reported as 404 instead so their existence is not disclosed.
    """

    type: str = Field(default="about:blank", description="URI reference identifying the problem type.")
    title: str = Field(description="Short human-readable summary of the problem.")
    status: int = Field(description="HTTP status code.")
    detail: str = Field(default="", description="Explanation specific to this occurrence.")
    request_id: str = Field(default="", description="Correlation ID for tracing this request in logs.")
    instance: str = Field(default="", description="Request path the problem occurred on.")

    @classmethod
    def for_status(cls, status_code: int, detail: str, request_id: str, instance: str = ""):
        return cls(
            type=PROBLEM_TYPES.get(status_code, "about:blank"),
            title=STATUS_TITLES.get(status_code, "Error"),
            status=status_code,
            detail=detail,
            request_id=request_id,
            instance=instance,
        )
