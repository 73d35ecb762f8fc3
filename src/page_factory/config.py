
import os
from dotenv import load_dotenv

load_dotenv()

# Substituted for "{base_url}" in page_url templates
BASE_URL = os.getenv("PF_BASE_URL", "http://localhost:8000").rstrip("/")

# Default wait for expected_element, in seconds
EXPECTED_ELEMENT_TIMEOUT = float(os.getenv("PF_EXPECTED_ELEMENT_TIMEOUT", "30"))
# How often the expected element is re-resolved while waiting
POLL_INTERVAL = float(os.getenv("PF_POLL_INTERVAL", "0.5"))

# Driver factory settings. Keep the implicit wait at 0 unless you know you want it:
# it stacks on top of the expected_element polling.
IMPLICIT_WAIT = int(os.getenv("PF_IMPLICIT_WAIT", "0"))
HEADLESS = os.getenv("PF_HEADLESS", "false").lower() == "true"

# --- Instrumentation / diagnostics ---
LOG_MODE = os.getenv("PF_LOG_MODE", "live").lower()  # live | debug | trace
LOG_FILE = os.getenv("PF_LOG_FILE") or None
# Page constructions slower than this are logged as warnings
SLOW_PHASE_S = float(os.getenv("PF_SLOW_PHASE_S", "60"))
