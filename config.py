# config.py - configuration and logging setup

import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# ==== LOGGING ====
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ==== SERVER ====
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 5000))
ALLOWED_ORIGIN = os.getenv("ALLOWED_ORIGIN", "*")

# ==== STORAGE ====
DATA_DIR = os.getenv("DATA_DIR", os.path.join(os.getcwd(), "mockdata"))
SESSIONS_FILE = "sessions.json"
HISTORY_FILE_TEMPLATE = "history-{session_id}.json"

# ==== CONSTANTS ====
WELCOME_RESPONSE = "Welcome! Ask a question to start the chat."
WELCOME_PREVIEW = "Welcome message"
MOCK_RESPONSE = "This is a mock response"
MOCK_TABLE = (
    ("Column A", "Value 1"),
    ("Column B", "Value 2"),
)
FEEDBACK_VALUES = {"like", "dislike"}
LIVENESS_TEXT = "Mock API server is running."


def session_title(position: int) -> str:
    return f"Chat {position}"
