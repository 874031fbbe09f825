"""
Response envelope - {code, message, data} returned by every endpoint.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar
from enum import IntEnum


T = TypeVar("T")


class ResultCode(IntEnum):
    """Numeric outcome codes carried in the envelope."""
    SUCCESS = 200
    PARAM_ERROR = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    DATA_NOT_EXIST = 404
    DATA_CONFLICT = 409
    ERROR = 500

    # Authentication
    TOKEN_INVALID = 701
    TOKEN_EXPIRED = 702
    ACCOUNT_LOCKED = 703
    ACCOUNT_DISABLED = 704
    LOGIN_FAILED = 705

    @property
    def message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_DEFAULT_MESSAGES = {
    ResultCode.SUCCESS: "Operation succeeded",
    ResultCode.PARAM_ERROR: "Invalid request parameters",
    ResultCode.UNAUTHORIZED: "Authentication required",
    ResultCode.FORBIDDEN: "Access denied",
    ResultCode.DATA_NOT_EXIST: "Data does not exist",
    ResultCode.DATA_CONFLICT: "Data conflict",
    ResultCode.ERROR: "Internal server error",
    ResultCode.TOKEN_INVALID: "Token invalid",
    ResultCode.TOKEN_EXPIRED: "Token expired",
    ResultCode.ACCOUNT_LOCKED: "Account locked",
    ResultCode.ACCOUNT_DISABLED: "Account disabled",
    ResultCode.LOGIN_FAILED: "Incorrect username or password",
}


@dataclass
class Result(Generic[T]):
    """Uniform response envelope."""
    code: int
    message: str
    data: Optional[T] = None

    @classmethod
    def success(cls, message: Optional[str] = None, data: Optional[T] = None) -> "Result[T]":
        return cls(code=int(ResultCode.SUCCESS), message=message or ResultCode.SUCCESS.message, data=data)

    @classmethod
    def error(cls, message: Optional[str] = None, code: int = ResultCode.ERROR) -> "Result[T]":
        code = int(code)
        if message is None:
            try:
                message = ResultCode(code).message
            except ValueError:
                message = ResultCode.ERROR.message
        return cls(code=code, message=message, data=None)

    def is_success(self) -> bool:
        return self.code == ResultCode.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "data": _plain(self.data)}


@dataclass
class PageResult(Generic[T]):
    """One page of a paginated query."""
    records: List[T] = field(default_factory=list)
    total: int = 0
    page_num: int = 1
    page_size: int = 10

    @property
    def pages(self) -> int:
        if self.total <= 0 or self.page_size <= 0:
            return 0
        return math.ceil(self.total / self.page_size)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records": [_plain(r) for r in self.records],
            "total": self.total,
            "pageNum": self.page_num,
            "pageSize": self.page_size,
            "pages": self.pages,
        }


def _plain(value: Any) -> Any:
    """Render nested models (anything with to_wire/to_dict) as plain data."""
    if hasattr(value, "to_wire"):
        return value.to_wire()
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
