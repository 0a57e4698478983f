"""Global constants used across DMRHub."""

# File naming
APP_NAME: str = "DMRHub"
LOG_SUFFIX: str = ".log"

# Paths
SYSTEM_LOG_DIR: str = "/var/log/DMRHub"
LOCAL_LOG_DIR: str = "."

# Desktop platforms never use the system log directory
LOCAL_ONLY_PLATFORMS = ("win32", "darwin")

# Modes
LOG_DIR_MODE: int = 0o755
LOG_FILE_MODE: int = 0o665

# Relay
QUEUE_CAPACITY: int = 200
DEFAULT_LINE_FORMAT: str = "{time:YYYY/MM/DD HH:mm:ss} {message}"

# Key bound on loguru records that belong to a category logger
SINK_TOKEN_KEY: str = "hublog_sink"
