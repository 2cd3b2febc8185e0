import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./chat_sessions.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", 1))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")

    # Upstream chat-completion gateway (OpenAI-compatible)
    AI_GATEWAY_URL = data.get(
        "AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions"
    )
    AI_GATEWAY_API_KEY = data.get(
        "AI_GATEWAY_API_KEY", os.environ.get("AI_GATEWAY_API_KEY", "")
    )
    AI_GATEWAY_TIMEOUT_SECONDS = float(data.get("AI_GATEWAY_TIMEOUT_SECONDS", 60))
    SYSTEM_PROMPT = data.get(
        "SYSTEM_PROMPT",
        "You are a helpful AI assistant. Keep your responses clear and concise.",
    )
