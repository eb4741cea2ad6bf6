import os
from typing import List, Optional
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()

class Settings(BaseSettings):
    """Application settings using Pydantic BaseSettings"""
    
    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./movielist.db")
    DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "10"))
    DB_STATEMENT_TIMEOUT: int = int(os.getenv("DB_STATEMENT_TIMEOUT", "15"))
    AUTO_CREATE_TABLES: bool = os.getenv("AUTO_CREATE_TABLES", "false").lower() == "true"
    
    # JWT
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your-secret-key-change-this-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
    
    # Password hashing
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))
    
    # HTTP
    PORT: int = int(os.getenv("PORT", "8000"))
    CORS_ALLOW_ORIGINS: Optional[str] = os.getenv("CORS_ALLOW_ORIGINS")
    
    # Client
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8000/api")
    CATALOG_API_KEY: Optional[str] = os.getenv("CATALOG_API_KEY")
    CATALOG_BASE_URL: str = os.getenv("CATALOG_BASE_URL", "https://api.themoviedb.org/3")
    CATALOG_LANGUAGE: str = os.getenv("CATALOG_LANGUAGE", "en-US")
    CATALOG_TIMEOUT: int = int(os.getenv("CATALOG_TIMEOUT", "30"))
    
    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "True").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in (self.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]
        return origins or [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]

    @property
    def bcrypt_rounds(self) -> int:
        # bcrypt rejects cost factors below 4
        return max(4, self.BCRYPT_ROUNDS)

# Singleton instance
_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """Get settings singleton instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
