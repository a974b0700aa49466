"""
Runtime configuration loaded from the environment.

load_dotenv() is called first so a local .env file can supply any of the
variables below during development; real environment variables take
precedence over the file.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


@dataclass(frozen=True)
class MySQLConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "test"
    pool_name: str = "catalog_pool"
    pool_size: int = 5


@dataclass(frozen=True)
class Settings:
    mysql: MySQLConfig = field(default_factory=MySQLConfig)
    log_level: str = "INFO"
    log_format: str = "console"  # console or json
    static_dir: str = "public"


def load_settings() -> Settings:
    """Build Settings from DB_*, LOG_* and STATIC_DIR environment variables."""
    load_dotenv()

    mysql = MySQLConfig(
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "3306")),
        user=os.getenv("DB_USER", "root"),
        password=os.getenv("DB_PASSWORD", ""),
        database=os.getenv("DB_NAME", "test"),
        pool_name=os.getenv("DB_POOL_NAME", "catalog_pool"),
        pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
    )
    return Settings(
        mysql=mysql,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_format=os.getenv("LOG_FORMAT", "console").lower(),
        static_dir=os.getenv("STATIC_DIR", "public"),
    )
