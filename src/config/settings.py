"""
Configuration settings for the Blog Posts API
"""

import os
import logging

# Configure logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Environment configuration
ENV = os.getenv("ENV", "PROD")  # PROD, QA or TEST
STORE_BACKEND = os.getenv("STORE_BACKEND", "postgres").lower()  # postgres or memory
DATABASE_URL = os.getenv("DATABASE_URL")
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")
PORT = int(os.getenv("PORT", 8080))

# Connection pool tuning
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 2))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 60))

SUPPORTED_STORE_BACKENDS = ("postgres", "memory")

logger.info(f"Environment: {ENV}, store backend: {STORE_BACKEND}")

# Validate required environment variables
if STORE_BACKEND not in SUPPORTED_STORE_BACKENDS:
    raise ValueError(
        f"Unsupported STORE_BACKEND '{STORE_BACKEND}'. Available: {', '.join(SUPPORTED_STORE_BACKENDS)}"
    )
if STORE_BACKEND == "postgres" and not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is required for the postgres store backend")

# CORS settings
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
