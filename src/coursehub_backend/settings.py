import os
import threading

class BackendSettings:
    _instance = None
    _lock = threading.Lock()

    def __init__(self):
        self.DEBUG_MODE = os.environ.get("DEBUG_MODE","development")
        # Database settings, DATABASE_URL wins over the POSTGRES_* parts
        self.DATABASE_URL = os.environ.get("DATABASE_URL", None)
        self.POSTGRES_URL = os.environ.get("POSTGRES_URL", "localhost:5432")
        self.POSTGRES_USER = os.environ.get("POSTGRES_USER", "postgres")
        self.POSTGRES_PASSWORD = os.environ.get("POSTGRES_PASSWORD", "postgres")
        self.POSTGRES_DB = os.environ.get("POSTGRES_DB", "coursehub")
        # Authentication settings
        self.SESSION_TTL_HOURS = int(os.environ.get("SESSION_TTL_HOURS", "24"))
        self.ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", None)
        self.CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(BackendSettings, cls).__new__(cls)
        return cls._instance

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_URL}/{self.POSTGRES_DB}"

settings = BackendSettings()
