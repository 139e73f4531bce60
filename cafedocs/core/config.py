from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./cafedocs.db"
    db_echo: bool = False

    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: list[str] = ["*"]

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7
    auth_cookie_name: str = "authToken"

    # 500 MB
    max_file_size: int = 500 * 1024 * 1024

    # Bootstrap admin account
    admin_email: str = "admin@cafe.com"
    admin_password: str = "admin123"
    admin_name: str = "Admin User"

    ping_message: str = "ping"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
