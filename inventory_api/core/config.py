import os
from dotenv import load_dotenv

load_dotenv()

def _env_bool(key: str, default: str) -> bool:
	return os.getenv(key, default).strip().lower() in ("1", "true", "yes", "on")

def _env_list(key: str, default: str) -> list[str]:
	return [item.strip() for item in os.getenv(key, default).split(",") if item.strip()]

class Settings:
	APP_NAME = os.getenv("APP_NAME", "Inventory API")
	ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
	HOST = os.getenv("HOST", "0.0.0.0")
	PORT = int(os.getenv("PORT", "3000"))
	LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

	JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
	JWT_ALG = "HS256"
	# Tokens live exactly one day; there is no refresh flow.
	JWT_EXPIRES_HOURS = 24

	BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

	CORS_ORIGINS = _env_list("CORS_ORIGIN", "*")

	# Requests allowed per client address in each window.
	RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", "true")
	RATE_LIMIT_MAX = int(os.getenv("RATE_LIMIT_MAX", "100"))
	RATE_LIMIT_WINDOW_MINUTES = int(os.getenv("RATE_LIMIT_WINDOW_MINUTES", "15"))

	SEED_DEMO_DATA = _env_bool("SEED_DEMO_DATA", "true")
	ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
	ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
	ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "Admin123!")

settings = Settings()
