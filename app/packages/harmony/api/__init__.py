"""接口汇总路由：统一挂载所有子路由。"""

from fastapi import APIRouter

from app.packages.harmony.api.endpoints import health, home, order, personal

api_router = APIRouter()
api_router.include_router(home.router)
api_router.include_router(order.router)
api_router.include_router(personal.router)
api_router.include_router(health.router)
