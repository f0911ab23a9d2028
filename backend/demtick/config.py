import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("DEMTICK_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Comma separated; the default is the React dev server
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("DEMTICK_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

MAX_UPLOAD_BYTES = int(os.getenv("DEMTICK_MAX_UPLOAD_BYTES", str(512 * 1024 * 1024)))

HOST = os.getenv("DEMTICK_HOST", "127.0.0.1")
PORT = int(os.getenv("DEMTICK_PORT", "8000"))
