"""健康检查接口：通过路径排除跳过统一包装，便于编排器探活。"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.packages.harmony.core.routing import AdvisedRoute

router = APIRouter(tags=["健康检查"], route_class=AdvisedRoute)


@router.get("/health", response_class=PlainTextResponse)
async def health_check() -> str:
    return "It's ok!"
