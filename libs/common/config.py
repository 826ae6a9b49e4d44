import os


def get_int_env(var: str, default: int) -> int:
    """Get an integer environment variable or raise a clear error."""
    value = os.getenv(var)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise EnvironmentError(f"Environment variable {var} must be an integer, got {value!r}")


class Config:
    def __init__(self):
        # Persistence (empty REDIS_URL keeps the graph in memory)
        self.REDIS_URL = os.getenv("REDIS_URL", "")
        self.GRAPH_STORAGE_KEY = os.getenv("GRAPH_STORAGE_KEY", "social-network-graph")

        # Size ceilings for the store
        self.MAX_GRAPH_USERS = get_int_env("MAX_GRAPH_USERS", 10000)
        self.MAX_GRAPH_FRIENDSHIPS = get_int_env("MAX_GRAPH_FRIENDSHIPS", 100000)

        # Logging
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


CFG = Config()

# Module-level exports
REDIS_URL = CFG.REDIS_URL
GRAPH_STORAGE_KEY = CFG.GRAPH_STORAGE_KEY
MAX_GRAPH_USERS = CFG.MAX_GRAPH_USERS
MAX_GRAPH_FRIENDSHIPS = CFG.MAX_GRAPH_FRIENDSHIPS
LOG_LEVEL = CFG.LOG_LEVEL
