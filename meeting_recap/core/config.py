import os
from pathlib import Path

from dotenv import load_dotenv

# Variables from .env, process environment wins
load_dotenv()

# Paths
BASE_DIR = Path(__file__).resolve().parent.parent.parent
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/database.db")

# External AI provider (OpenAI-compatible REST API)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")
TRANSCRIPTION_MODEL = os.getenv("TRANSCRIPTION_MODEL", "whisper-1")
EXTRACTION_MODEL = os.getenv("EXTRACTION_MODEL", "gpt-4-turbo-preview")
EXTRACTION_TEMPERATURE = float(os.getenv("EXTRACTION_TEMPERATURE", 0.3))
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", 120.0))

# Sessions and logging
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "meeting_recap_session")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Server
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", 8000))
