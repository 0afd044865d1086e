"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns.
These simplify error raising across services and repositories by
eliminating the need to specify status codes at each call site.

Store failures (SQLAlchemyError) are not wrapped here; they propagate
to the caller unchanged.

Usage:
    from app.utils.exceptions import InvalidPageRequestError
    raise InvalidPageRequestError("Unknown sort property: height")
"""

from fastapi import HTTPException, status


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidPageRequestError(BadRequestError):
    """잘못된 페이지 요청 — 저장소 접근 전에 거부.

    Invalid page request (unknown sort property or direction).
    Always raised before any query reaches the store.
    """

    def __init__(self, detail: str = "Invalid page request") -> None:
        super().__init__(detail=detail)
