"""统一响应业务包：提供响应增强、异常转换与演示接口。"""

from app.packages.types import AppPackage

from .api import api_router
from .core.advice import build_response_advice
from .core.config import get_settings
from .core.exceptions import install_exception_handlers
from .core.logger import logger, setup_logging

package = AppPackage(
    name="harmony",
    api_router=api_router,
    get_settings=get_settings,
    setup_logging=setup_logging,
    logger=logger,
    build_response_advice=build_response_advice,
    install_exception_handlers=install_exception_handlers,
)

__all__ = ["package", "api_router", "get_settings"]
