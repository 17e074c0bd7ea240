# json_table_editor/config.py
import os
from dotenv import load_dotenv

load_dotenv()

PORT = 8888

DATA_FILE = os.environ.get("JSON_EDITOR_DATA_FILE", "data.json")
API_BASE = os.environ.get("JSON_EDITOR_API_BASE", f"http://127.0.0.1:{PORT}/api")
LOG_LEVEL = os.environ.get("JSON_EDITOR_LOG_LEVEL", "INFO").upper()
REQUEST_TIMEOUT = float(os.environ.get("JSON_EDITOR_TIMEOUT", "30"))

CORS_ORIGINS = [
    "http://localhost",
    "http://localhost:8501",
    "http://127.0.0.1",
    "http://127.0.0.1:8501",
]
