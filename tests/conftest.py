"""测试夹具：按需构建带统一响应配置的应用与客户端。"""

from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.main import create_app
from app.packages.harmony.core.config import Settings

ENDPOINTS = "app.packages.harmony.api.endpoints"
INTERCEPTED_PACKAGES = f"{ENDPOINTS}.order,{ENDPOINTS}.personal"


def build_settings(**overrides: str) -> Settings:
    """构建测试配置，默认只拦截订单与个人中心接口。"""
    values = {
        "HARMONY_ENABLED": "true",
        "HARMONY_PACKAGES": INTERCEPTED_PACKAGES,
        "HARMONY_EXCLUDE_PATHS": "/health",
        "RESULT_SUCCESS_CODE": "code",
        "RESULT_SUCCESS_MESSAGE": "operation succeeded",
        "RESULT_FAILURE_CODE": "500",
        "RESULT_FAILURE_MESSAGE": "internal server error",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def settings() -> Settings:
    return build_settings()


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def client_factory() -> Generator[Callable[..., TestClient], None, None]:
    """按配置覆盖项创建客户端，用于验证不同拦截策略。"""
    clients: list[TestClient] = []

    def _factory(**overrides: str) -> TestClient:
        test_client = TestClient(create_app(build_settings(**overrides)), raise_server_exceptions=False)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _factory

    for test_client in clients:
        test_client.__exit__(None, None, None)


@pytest.fixture()
def match_all_app() -> FastAPI:
    """包前缀为空、拦截全部端点的应用，便于挂载测试专用路由。"""
    return create_app(build_settings(HARMONY_PACKAGES=""))
