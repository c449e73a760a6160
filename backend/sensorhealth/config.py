import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DATABASE_PATH = os.getenv("DATABASE_PATH", "../data/sensorhealth.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", str(Path(__file__).parent.parent.parent / "logs"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

# Seconds a batch of dashboard events waits before being published
BROADCAST_THROTTLE_SECONDS = float(os.getenv("BROADCAST_THROTTLE_SECONDS", "5"))

# Deadline in seconds for a single ingest or refresh round trip
INGEST_TIMEOUT = float(os.getenv("INGEST_TIMEOUT", "5"))
