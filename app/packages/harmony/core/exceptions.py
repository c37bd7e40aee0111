"""异常处理模块：定义业务异常，并把所有异常统一转换为失败信封。"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .logger import get_request_id, logger
from .result import Failure, ResultTemplate


class InvalidArgumentError(ValueError):
    """必需的协作对象缺失或参数非法，属于启动期配置错误，不在请求期恢复。"""


class AppException(Exception):
    """携带响应码与提示的业务异常，由全局处理器转换为失败信封。

    ``code`` 为空时使用模板中的兜底失败码；默认以 HTTP 200 返回，
    由信封中的 ``success`` 字段表达失败。
    """

    def __init__(self, message: str, code: Any = None, status_code: int = status.HTTP_200_OK) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class PermissionDenied(AppException):
    """当前用户无权访问目标资源。"""


def _result_template(request: Request) -> ResultTemplate:
    advice = getattr(request.app.state, "response_advice", None)
    if advice is None:
        return ResultTemplate()
    return advice.template


def _render(request: Request, failure: Failure, status_code: int) -> JSONResponse:
    envelope = _result_template(request).wrap(None, failure)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(envelope))


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """业务异常：响应码与提示直接写入信封。"""
    template = _result_template(request)
    code = template.failure_code if exc.code is None else exc.code
    logger.warning("Request %s %s failed: [%s] %s", request.method, request.url.path, code, exc.message)
    return _render(request, Failure(code=code, message=exc.message), exc.status_code)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """将 ``HTTPException`` 转换为失败信封，响应码取 HTTP 状态码。"""
    response = _render(request, Failure(code=str(exc.status_code), message=str(exc.detail)), exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """请求参数校验失败：合并所有错误提示。"""
    message = "; ".join(str(error.get("msg", "validation error")) for error in exc.errors())
    return _render(
        request,
        Failure(code=str(status.HTTP_422_UNPROCESSABLE_ENTITY), message=message),
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """兜底处理：记录堆栈并返回模板中的默认失败信封，不向调用方暴露异常细节。"""
    logger.exception("Unhandled error while processing %s %s", request.method, request.url.path)
    template = _result_template(request)
    failure = Failure(code=template.failure_code, message=template.failure_message)
    response = _render(request, failure, status.HTTP_500_INTERNAL_SERVER_ERROR)
    # ServerErrorMiddleware 位于请求 ID 中间件之外，需要在此补齐响应头
    request_id = get_request_id()
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
