import os

# Keep app startup from creating a database file or reaching external services.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("OPIK_ENABLED", "false")
os.environ.pop("LLM_API_KEY", None)
