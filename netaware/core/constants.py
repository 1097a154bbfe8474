import os
import tempfile
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env from project root
_project_root = Path(__file__).parent.parent.parent
load_dotenv(_project_root / ".env")

APP_NAME = "netaware"

# Application version from environment
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")

# Seconds between platform interface polls
POLL_INTERVAL = float(os.getenv("NETAWARE_POLL_INTERVAL", "2.0"))

# Emit a verdict only when it differs from the previously emitted one
DEDUPLICATE_VERDICTS = os.getenv("NETAWARE_DEDUPLICATE", "1").strip().lower() not in ("0", "false", "no", "off")

LOG_LEVEL = os.getenv("NETAWARE_LOG_LEVEL", "DEBUG")

# Temporary directory (cross-platform)
TMPDIR = os.environ.get("NETAWARE_TMPDIR", os.path.join(tempfile.gettempdir(), APP_NAME))

# Log files
LOG_FILE = os.path.join(TMPDIR, "netaware.log")
