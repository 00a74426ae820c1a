import os
from dotenv import load_dotenv

load_dotenv()  # Load from .env file

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./journal.db")

# Token & Auth
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "7"))

# One-time codes
OTP_TTL_SECONDS = int(os.getenv("OTP_TTL_SECONDS", "300"))
OTP_BACKEND = os.getenv("OTP_BACKEND", "memory")  # "memory" or "database"
OTP_DEMO_MODE = os.getenv("OTP_DEMO_MODE", "true").strip().lower() in ("1", "true", "yes")

# Google Sign-In
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
GOOGLE_TOKENINFO_URL = os.getenv("GOOGLE_TOKENINFO_URL", "https://oauth2.googleapis.com/tokeninfo")

# Text generation (any OpenAI-compatible chat completions endpoint)
GENERATION_API_KEY = os.getenv("GENERATION_API_KEY")
GENERATION_BASE_URL = os.getenv(
    "GENERATION_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/"
)
GENERATION_MODEL = os.getenv("GENERATION_MODEL", "gemini-1.5-flash")
GENERATION_TIMEOUT_SECONDS = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "20"))

# CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
