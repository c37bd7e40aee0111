"""应用入口：负责创建 FastAPI 实例，装配统一响应增强与异常处理。"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.middleware.request_id import RequestIdMiddleware
from app.packages import get_active_package
from app.packages.harmony.core.advice import install_response_advice
from app.packages.harmony.core.config import Settings

package = get_active_package()
package.setup_logging()
logger = package.logger


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """按给定配置构建应用；未传入时使用环境变量加载的全局配置。"""
    settings = settings or package.get_settings()
    advice = package.build_response_advice(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        """输出统一响应配置，确认服务可用。"""
        properties = advice.properties
        logger.info(
            "Response advice enabled=%s packages=%s exclude_paths=%s",
            properties.enabled,
            list(properties.packages) or "<all>",
            list(properties.exclude_paths),
        )
        logger.info("SUCCESS - Application running at http://127.0.0.1:%s", settings.app_port)
        yield

    app = FastAPI(title=settings.project_name, debug=settings.debug, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIdMiddleware)

    install_response_advice(app, advice)
    package.install_exception_handlers(app)
    app.include_router(package.api_router)

    return app


app = create_app()
