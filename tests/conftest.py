import os

# Ensure settings can be initialized before test modules import the app
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
