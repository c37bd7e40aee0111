"""统一响应拦截：判断端点返回值是否需要包装为 ``TerResult`` 信封。

判定规则：
- 配置关闭时一律放行；
- ``packages`` 为空表示匹配全部端点，否则端点的完整名称需以任一前缀开头（纯字符串前缀匹配）；
- 路由路径命中 ``exclude_paths`` 前缀时放行；
- 端点声明的返回类型本身就是 ``TerResult`` 时放行，避免重复包装。
"""

from __future__ import annotations

import inspect
import typing
from dataclasses import dataclass
from typing import Any, Callable, Optional

from fastapi import FastAPI

from .config import HarmonyProperties, Settings
from .exceptions import InvalidArgumentError
from .logger import logger
from .result import ResultTemplate, Success, TerResult


@dataclass(frozen=True)
class CandidateHandler:
    """即将产生响应的端点描述：完整名称、声明的返回类型以及路由路径。"""

    declaring_name: str
    return_type: Any = None
    path: Optional[str] = None

    @classmethod
    def from_endpoint(cls, endpoint: Callable[..., Any], path: Optional[str] = None) -> CandidateHandler:
        declaring_name = f"{endpoint.__module__}.{endpoint.__qualname__}"
        return cls(declaring_name=declaring_name, return_type=_declared_return_type(endpoint), path=path)


def _declared_return_type(endpoint: Callable[..., Any]) -> Any:
    try:
        hints = typing.get_type_hints(endpoint)
    except (NameError, TypeError):
        # 前向引用无法解析时退回原始注解
        annotation = inspect.signature(endpoint).return_annotation
        return None if annotation is inspect.Signature.empty else annotation
    return hints.get("return")


def is_envelope_type(annotation: Any) -> bool:
    """返回类型是否为 ``TerResult`` 或其参数化/子类形式。"""
    candidate = typing.get_origin(annotation) or annotation
    return inspect.isclass(candidate) and issubclass(candidate, TerResult)


def should_intercept(candidate: CandidateHandler, properties: HarmonyProperties) -> bool:
    if candidate is None or not candidate.declaring_name:
        raise InvalidArgumentError("CandidateHandler must expose a declaring name")
    if properties is None:
        raise InvalidArgumentError("HarmonyProperties must not be None")

    if not properties.enabled:
        return False

    packages = properties.packages
    empty_package = not packages
    intercept = empty_package or any(candidate.declaring_name.startswith(prefix) for prefix in packages)
    excluded = candidate.path is not None and any(
        candidate.path.startswith(prefix) for prefix in properties.exclude_paths
    )
    return intercept and not excluded and not is_envelope_type(candidate.return_type)


class GlobalResponseAdvice:
    """全局响应增强：持有响应模板与拦截配置，对命中的端点返回值进行统一包装。"""

    def __init__(self, template: ResultTemplate, properties: HarmonyProperties) -> None:
        if template is None:
            raise InvalidArgumentError("ResultTemplate must not be None")
        if properties is None:
            raise InvalidArgumentError("HarmonyProperties must not be None")
        self.template = template
        self._properties = properties

    @property
    def properties(self) -> HarmonyProperties:
        return self._properties

    def reload(self, properties: HarmonyProperties) -> None:
        """整体替换拦截配置；单次赋值保证并发读取方不会看到半更新状态。"""
        if properties is None:
            raise InvalidArgumentError("HarmonyProperties must not be None")
        self._properties = properties
        logger.info(
            "Response advice reloaded: enabled=%s packages=%s exclude_paths=%s",
            properties.enabled,
            list(properties.packages),
            list(properties.exclude_paths),
        )

    def supports(self, candidate: CandidateHandler) -> bool:
        return should_intercept(candidate, self._properties)

    def before_body_write(self, body: Any) -> TerResult:
        return self.template.wrap(body, Success())


def build_response_advice(settings: Settings) -> GlobalResponseAdvice:
    return GlobalResponseAdvice(ResultTemplate.from_settings(settings), HarmonyProperties.from_settings(settings))


def install_response_advice(app: FastAPI, advice: GlobalResponseAdvice) -> None:
    if advice is None:
        raise InvalidArgumentError("GlobalResponseAdvice must not be None")
    app.state.response_advice = advice


def get_response_advice(app: FastAPI) -> Optional[GlobalResponseAdvice]:
    return getattr(app.state, "response_advice", None)
