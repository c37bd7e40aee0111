"""统一响应结构：``TerResult`` 信封以及成功/失败两种结果的封装。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict

from .config import Settings

CodeT = TypeVar("CodeT")
MessageT = TypeVar("MessageT")
DataT = TypeVar("DataT")


class TerResult(BaseModel, Generic[CodeT, MessageT, DataT]):
    """系统统一的响应外层结构，序列化为 ``success``/``code``/``message``/``data``。"""

    model_config = ConfigDict(frozen=True)

    success: bool
    code: CodeT
    message: MessageT
    data: Optional[DataT] = None


@dataclass(frozen=True)
class Success:
    """处理成功，响应码与提示取模板默认值。"""


@dataclass(frozen=True)
class Failure:
    """已归类的业务失败，``code``/``message`` 原样写入信封。"""

    code: Any
    message: Any


Outcome = Union[Success, Failure]


@dataclass(frozen=True)
class ResultTemplate:
    """响应模板：持有成功默认值与兜底失败值，负责把原始返回值包装为信封。"""

    success_code: Any = "code"
    success_message: Any = "operation succeeded"
    failure_code: Any = "500"
    failure_message: Any = "internal server error"

    @classmethod
    def from_settings(cls, settings: Settings) -> ResultTemplate:
        return cls(
            success_code=settings.result_success_code,
            success_message=settings.result_success_message,
            failure_code=settings.result_failure_code,
            failure_message=settings.result_failure_message,
        )

    def wrap(self, raw_value: Any, outcome: Outcome) -> TerResult:
        """根据处理结果构建信封：成功时原样携带 ``raw_value``，失败时 ``data`` 为空。"""
        if isinstance(outcome, Success):
            return TerResult(
                success=True,
                code=self.success_code,
                message=self.success_message,
                data=raw_value,
            )
        if isinstance(outcome, Failure):
            return TerResult(success=False, code=outcome.code, message=outcome.message)
        raise TypeError(f"unsupported outcome: {outcome!r}")

    def ok(self, data: Any = None) -> TerResult:
        return self.wrap(data, Success())

    def fail(self, code: Any = None, message: Any = None) -> TerResult:
        failure = Failure(
            code=self.failure_code if code is None else code,
            message=self.failure_message if message is None else message,
        )
        return self.wrap(None, failure)
