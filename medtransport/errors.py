from __future__ import annotations

import enum


class ErrorCode(enum.IntEnum):
    FORBIDDEN = 403
    NOT_FOUND = 404


class NotFound(LookupError):
    code = ErrorCode.NOT_FOUND


class Forbidden(PermissionError):
    code = ErrorCode.FORBIDDEN


def ensure_owner(entity, actor: str, what: str) -> None:
    if entity.owner != actor:
        raise Forbidden(f"{what}: доступ только для владельца")


_BY_CODE = {
    ErrorCode.NOT_FOUND: NotFound,
    ErrorCode.FORBIDDEN: Forbidden,
}


def exception_for(code: ErrorCode) -> Exception:
    return _BY_CODE[ErrorCode(code)](f"error {int(code)}")
