from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    全局配置，从环境变量 / .env 中读取。
    """

    # Functions Host 通过该变量告知自定义处理程序监听的端口
    FUNCTIONS_CUSTOMHANDLER_PORT: int = 8080
    # Host 只会通过本机回环地址转发调用
    HOST: str = "127.0.0.1"

    # 模拟处理耗时（秒）
    PROCESSING_DELAY_S: float = Field(default=5.0, ge=0)

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    获取全局单例配置实例。
    """
    return Settings()
