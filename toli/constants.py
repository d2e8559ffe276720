"""
Constants for the toli application.
"""
from pathlib import Path
import os

# Application information
APP_DESCRIPTION = "Terminal Intelligence & Learning Operator - natural language interface for shell commands"

# Paths
CONFIG_DIR = Path(os.path.expanduser("~/.config/toli"))
CONFIG_FILE = CONFIG_DIR / "config.toml"
LOG_DIR = CONFIG_DIR / "logs"

# Logging
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"
LOG_ROTATION = "10 MB"
LOG_RETENTION = "10 days"

# Backends
OLLAMA_DEFAULT_ENDPOINT = "http://localhost:11434"
OLLAMA_DEFAULT_MODEL = "llama2"          # used when a backend is built without a model
OLLAMA_CONFIG_MODEL = "llama3.2"         # written into a fresh config file
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.2
REQUEST_TIMEOUT = 60  # seconds

DEFAULT_ADDITIONAL_CONTEXT = "running macos and generally zsh, is a developer, and uses brew"

# Retry-and-repair
MAX_ATTEMPTS = 5

# Confidence bands shared by the prompt and the classifier
COMMAND_CONFIDENCE_THRESHOLD = 0.8   # >= : safe to offer for direct execution
SCRIPT_CONFIDENCE_THRESHOLD = 0.5    # >= : review as a script before running
