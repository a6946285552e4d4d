"""Centralized runner defaults."""

# Application under test
DEFAULT_BASE_URL = "https://demo.codenbox.com"
LOGIN_ROUTE = "index.php?route=account/login"
LOGIN_ROUTE_FRAGMENT = "route=account/login"

# Default viewport
DEFAULT_VIEWPORT = (1280, 720)

# Timeouts (milliseconds)
DEFAULT_COMMAND_TIMEOUT_MS = 8_000
PAGE_LOAD_TIMEOUT_MS = 30_000
FORM_TIMEOUT_MS = 10_000  # structural: login form must exist
SUBMIT_PROBE_TIMEOUT_MS = 2_000
ERROR_TIMEOUT_MS = 5_000  # asynchronous UI feedback (alerts)
POLL_INTERVAL_MS = 100

# Whole-test re-execution counts
RETRIES_RUN_MODE = 2
RETRIES_OPEN_MODE = 0

# Evidence
RECORD_VIDEO = True
SCREENSHOT_ON_FAILURE = True

# Suite discovery
DEFAULT_SPEC_DIR = "acceptance"
DEFAULT_EXCLUDE_PATTERNS = ("**/examples/*", "**/practice/*")

# Credential profiles readable from configuration
CREDENTIAL_PROFILES = ("default", "invalid")
