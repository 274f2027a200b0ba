import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# External data service (hosted backend) - both values are required
SERVICE_URL = os.getenv("SERVICE_URL")
SERVICE_KEY = os.getenv("SERVICE_KEY")

if not SERVICE_URL or not SERVICE_KEY:
    missing = [
        name
        for name, value in (("SERVICE_URL", SERVICE_URL), ("SERVICE_KEY", SERVICE_KEY))
        if not value
    ]
    raise RuntimeError(f"Missing required configuration: {', '.join(missing)}")

SERVICE_URL = SERVICE_URL.rstrip("/")

# Relational store exposed by the hosted backend
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./photobooth.db")

# Object storage (S3-compatible bucket of the hosted backend)
STORAGE_ENDPOINT_URL = os.getenv("STORAGE_ENDPOINT_URL", f"{SERVICE_URL}/storage/v1/s3")
STORAGE_ACCESS_KEY_ID = os.getenv("STORAGE_ACCESS_KEY_ID")
STORAGE_SECRET_ACCESS_KEY = os.getenv("STORAGE_SECRET_ACCESS_KEY")
STORAGE_REGION = os.getenv("STORAGE_REGION", "auto")
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "gallery-images")
# Base URL under which public objects are served
STORAGE_PUBLIC_URL = os.getenv(
    "STORAGE_PUBLIC_URL", f"{SERVICE_URL}/storage/v1/object/public/{STORAGE_BUCKET}"
).rstrip("/")

# Auth API of the hosted backend (staff sessions are delegated to it)
AUTH_URL = os.getenv("AUTH_URL", f"{SERVICE_URL}/auth/v1").rstrip("/")
AUTH_TIMEOUT_SECONDS = float(os.getenv("AUTH_TIMEOUT_SECONDS", "10"))

# Frontend base URL, used for CORS defaults
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

# Comma-separated list of origins allowed by CORS
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", FRONTEND_URL).split(",")
    if origin.strip()
]

SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"
