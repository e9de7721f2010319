from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Scholarship Evaluation Engine"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./scholarship_engine.db"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Bootstrap values for the engine_state row; only read on first start.
    admin_principal: str = "deployer"
    verifier_address: str = "mock-verifier"
    registry_address: str = "mock-registry"
    collaborator_timeout_seconds: float = 10.0
    # Preload demo students into the mock-registry / mock-verifier doubles.
    demo_students: bool = True

    host: str = "0.0.0.0"
    port: int = 3005

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
