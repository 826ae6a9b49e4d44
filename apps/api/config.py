"""
Configuration constants for the social graph API
"""
from libs.common.config import Config

# Application settings
APP_TITLE = "social-graph API"
APP_VERSION = "1.0.0"

# Default values
DEFAULT_SUGGESTION_LIMIT = 10
MAX_SUGGESTION_LIMIT = 100
COMMUNITY_METHODS = ("dfs", "union_find")
EXPORT_FILENAME = "social-network-data.json"


def load_config() -> Config:
	"""Read the environment at call time so tests can patch it first"""
	return Config()
