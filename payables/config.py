"""
Application settings, read from the environment (and ``.env``).
"""
from typing import List, Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    # Full SQLAlchemy URL; overrides the MYSQL_* parts when set
    DATABASE_URL: Optional[str] = None

    # MySQL service (the host is the service name inside the deployment network)
    MYSQL_HOST: str = "mysql"
    MYSQL_USER: str = "mega"
    MYSQL_PASS: str = "megamega"
    MYSQL_DB: str = "hpspeniel"

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT: Optional[float] = None  # None: wait for a free connection forever
    DB_ECHO: bool = False

    # HTTP
    PORT: int = 3000

    # CORS
    CORS_ORIGINS: List[str] = [
        "https://hpspeniel.com.br",
        "https://www.hpspeniel.com.br",
    ]
    CORS_ALLOW_DEV: bool = False
    DEV_CORS_ORIGINS: List[str] = [
        "http://127.0.0.1:5500",
        "http://localhost:5500",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "mysql+pymysql",
            username=self.MYSQL_USER,
            password=self.MYSQL_PASS,
            host=self.MYSQL_HOST,
            database=self.MYSQL_DB,
        ).render_as_string(hide_password=False)

    @property
    def allowed_origins(self) -> List[str]:
        if self.CORS_ALLOW_DEV:
            return self.CORS_ORIGINS + [o for o in self.DEV_CORS_ORIGINS if o not in self.CORS_ORIGINS]
        return list(self.CORS_ORIGINS)


settings = Settings()
