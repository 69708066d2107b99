from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "LeaseDesk Back Office API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend Domains
    # -------------------------------------------------
    FRONTEND_DOMAIN: Optional[str] = Field(None, env="FRONTEND_DOMAIN")

    FRONTEND_DOMAINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (Primary DB & Auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, env="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    # -------------------------------------------------
    # Roles & Permissions
    # -------------------------------------------------
    # Role assigned when user metadata lists no roles at all
    DEFAULT_ROLE: str = Field("viewer", env="DEFAULT_ROLE")

    # -------------------------------------------------
    # Dropdown lookup tables
    # -------------------------------------------------
    LOOKUP_CACHE_TTL_SECONDS: int = Field(
        60,
        env="LOOKUP_CACHE_TTL_SECONDS",
        description="How long city/property/unit/tenant lookup tables are cached (default: 60)",
    )

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

# 1) add the deployed frontend domain
if settings.FRONTEND_DOMAIN:
    domain = settings.FRONTEND_DOMAIN
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    cors_origins.append(domain.rstrip("/"))

# 2) add local / static frontend domains
cors_origins.extend([d.rstrip("/") for d in settings.FRONTEND_DOMAINS])

# 3) remove duplicates
settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
