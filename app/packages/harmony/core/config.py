"""配置模块：加载环境变量中的统一响应配置，并构建只读的拦截配置快照。"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _detect_base_dir() -> Path:
    """向上查找包含 `app` 目录的项目根路径。"""
    current = Path(__file__).resolve()
    for candidate in current.parents:
        if (candidate / "app").is_dir():
            return candidate
    return current.parent


BASE_DIR = _detect_base_dir()


def _as_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_environment() -> None:
    """按 ENV_FILE > .env.<ENVIRONMENT> > .env 的优先级加载环境文件。"""
    env_file_override = os.getenv("ENV_FILE")
    if env_file_override:
        candidate = BASE_DIR / env_file_override
        if candidate.exists():
            load_dotenv(candidate, override=True, encoding="utf-8")
        return

    base_env = BASE_DIR / ".env"
    if base_env.exists():
        load_dotenv(base_env, override=False, encoding="utf-8")

    environment = os.getenv("ENVIRONMENT")
    if environment is None and _as_bool(os.getenv("DEBUG")):
        environment = "development"
    if not environment:
        return

    candidate_name = environment if environment.startswith(".env") else f".env.{environment}"
    candidate_path = BASE_DIR / candidate_name
    if candidate_path.exists():
        load_dotenv(candidate_path, override=True, encoding="utf-8")


_load_environment()


def _split_csv(raw: Optional[str]) -> tuple[str, ...]:
    return tuple(item.strip() for item in (raw or "").split(",") if item.strip())


class Settings(BaseSettings):
    """
    应用运行所需的全部配置项，每个字段都可以通过同名环境变量覆盖。
    统一响应相关的开关与包前缀以 ``HARMONY_`` 开头，默认响应码与提示以 ``RESULT_`` 开头。
    """

    project_name: str = Field(default="Harmony API", alias="PROJECT_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    app_port: int = Field(default=8000, alias="APP_PORT")

    harmony_enabled: bool = Field(default=True, alias="HARMONY_ENABLED")
    harmony_packages_raw: str = Field(default="", alias="HARMONY_PACKAGES")
    harmony_exclude_paths_raw: str = Field(default="/health", alias="HARMONY_EXCLUDE_PATHS")

    result_success_code: str = Field(default="code", alias="RESULT_SUCCESS_CODE")
    result_success_message: str = Field(default="operation succeeded", alias="RESULT_SUCCESS_MESSAGE")
    result_failure_code: str = Field(default="500", alias="RESULT_FAILURE_CODE")
    result_failure_message: str = Field(default="internal server error", alias="RESULT_FAILURE_MESSAGE")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="log", alias="LOG_DIR")
    log_file_name: str = Field(default="app.log", alias="LOG_FILE_NAME")
    log_json: bool = Field(default=False, alias="LOG_JSON")
    timezone: str = Field(default="UTC", alias="TIMEZONE")

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    @property
    def harmony_packages(self) -> tuple[str, ...]:
        """需要统一包装的端点模块前缀，保持配置中的顺序。"""
        return _split_csv(self.harmony_packages_raw)

    @property
    def harmony_exclude_paths(self) -> tuple[str, ...]:
        return _split_csv(self.harmony_exclude_paths_raw)

    @property
    def log_file_path(self) -> Path:
        """日志文件的绝对路径，相对目录以项目根路径为基准。"""
        directory = Path(self.log_dir)
        if not directory.is_absolute():
            directory = BASE_DIR / directory
        return directory / self.log_file_name

    @property
    def timezone_info(self) -> ZoneInfo:
        """返回配置的时区，无法解析时回退到 UTC。"""
        try:
            return ZoneInfo(self.timezone)
        except ZoneInfoNotFoundError:
            return ZoneInfo("UTC")


@dataclass(frozen=True)
class HarmonyProperties:
    """统一响应拦截配置：进程启动时构建一次，之后只读。

    ``packages`` 为空表示匹配全部端点；``exclude_paths`` 中的路由前缀始终跳过包装。
    """

    enabled: bool = True
    packages: tuple[str, ...] = ()
    exclude_paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # 允许传入 list 等可迭代对象，统一冻结为 tuple
        object.__setattr__(self, "packages", _freeze(self.packages, "packages"))
        object.__setattr__(self, "exclude_paths", _freeze(self.exclude_paths, "exclude_paths"))

    @classmethod
    def from_settings(cls, settings: Settings) -> "HarmonyProperties":
        return cls(
            enabled=settings.harmony_enabled,
            packages=settings.harmony_packages,
            exclude_paths=settings.harmony_exclude_paths,
        )


def _freeze(values: Iterable[str], field_name: str) -> tuple[str, ...]:
    if isinstance(values, str):
        raise TypeError(f"{field_name} must be a sequence of strings, not a single string")
    frozen = tuple(values)
    for value in frozen:
        if not isinstance(value, str):
            raise TypeError(f"{field_name} entries must be strings, got {type(value).__name__}")
    return frozen


@lru_cache
def get_settings() -> Settings:
    """返回单例化的配置对象，避免重复解析环境变量。"""
    return Settings()
