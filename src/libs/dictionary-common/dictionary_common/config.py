# src/libs/dictionary-common/dictionary_common/config.py
import os
from dotenv import load_dotenv

# Load environment variables from a .env file for local development.
load_dotenv()


# Content repository (language catalog + dictionary language nodes)
CONTENT_REPOSITORY_URL = os.getenv("CONTENT_REPOSITORY_URL", "http://content-repository:4502").rstrip("/")
CONTENT_REPOSITORY_TIMEOUT_SECONDS = float(os.getenv("CONTENT_REPOSITORY_TIMEOUT_SECONDS", "5.0"))
CONTENT_REPOSITORY_RETRY_ATTEMPTS = int(os.getenv("CONTENT_REPOSITORY_RETRY_ATTEMPTS", "3"))

# Locale handling
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "en")
SUPPORTED_LOCALES = [
    locale.strip()
    for locale in os.getenv("SUPPORTED_LOCALES", "en,de,fr,nl,es,it,ja,zh").split(",")
    if locale.strip()
]

# Service identity (used by the logging filter)
SERVICE_NAME = os.getenv("SERVICE_NAME", "language-datasource-service")
ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
