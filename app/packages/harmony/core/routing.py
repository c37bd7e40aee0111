"""带响应增强的路由类：端点结果序列化后，按拦截规则改写为统一信封。"""

from __future__ import annotations

import json
from typing import Any, Callable, Coroutine

from fastapi import Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import FileResponse, JSONResponse, StreamingResponse
from fastapi.routing import APIRoute

from .advice import CandidateHandler, GlobalResponseAdvice, get_response_advice
from .logger import logger

_REPLACED_HEADERS = {"content-length", "content-type"}


class AdvisedRoute(APIRoute):
    """所有业务路由使用的路由类，增强逻辑从 ``app.state.response_advice`` 获取。"""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()
        candidate = CandidateHandler.from_endpoint(self.endpoint, path=self.path_format)

        async def advised_route_handler(request: Request) -> Response:
            response = await original_route_handler(request)
            advice = get_response_advice(request.app)
            if advice is None or not advice.supports(candidate):
                return response
            return rewrite_response(advice, response)

        return advised_route_handler


_BODYLESS_STATUS_CODES = {204, 205, 304}


def _is_wrappable(response: Response) -> bool:
    if isinstance(response, (StreamingResponse, FileResponse)):
        return False
    # 无响应体的状态码不允许写入信封
    if response.status_code < 200 or response.status_code in _BODYLESS_STATUS_CODES:
        return False
    content_type = response.headers.get("content-type", "")
    if content_type and "json" not in content_type and not content_type.startswith("text/"):
        return False
    # 错误响应由异常处理器负责渲染
    return response.status_code < 400


def _decode_body(response: Response) -> Any:
    body = response.body
    if not body:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return json.loads(body)
    return body.decode(response.charset)


def rewrite_response(advice: GlobalResponseAdvice, response: Response) -> Response:
    """把已序列化的响应体还原为原始值，包装为信封后重新渲染。"""
    if not _is_wrappable(response):
        logger.debug("Skip wrapping %s with status %s", type(response).__name__, response.status_code)
        return response

    envelope = advice.before_body_write(_decode_body(response))
    wrapped = JSONResponse(
        status_code=response.status_code,
        content=jsonable_encoder(envelope),
        background=response.background,
    )
    for key, value in response.headers.items():
        if key.lower() not in _REPLACED_HEADERS:
            wrapped.headers.append(key, value)
    return wrapped
