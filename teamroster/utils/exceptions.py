"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Pre-configured HTTPException subclasses raised by the query layer and
services; FastAPI renders them as JSON error responses.

Usage:
    from teamroster.utils.exceptions import NotFoundError, InvalidArgumentError
    raise NotFoundError("Member not found")
    raise InvalidArgumentError("limit must be positive")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised by services when the caller requires a present value
    (repositories return None instead).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    409 Conflict exception, e.g. a duplicate team name.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidArgumentError(BadRequestError):
    """잘못된 인자 예외 — 음수 offset, 0 이하 limit, 알 수 없는 정렬 필드.

    Invalid argument: negative offset, non-positive limit or an
    unknown sort field.
    """

    def __init__(self, detail: str = "Invalid argument") -> None:
        super().__init__(detail=detail)
