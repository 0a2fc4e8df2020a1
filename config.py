"""Configuration module for the student records search service."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///students.db")

# Cache settings
CACHE_TTL = int(os.getenv("CACHE_TTL", "300"))  # 5 minutes

# Search
SEARCH_RESULT_LIMIT = int(os.getenv("SEARCH_RESULT_LIMIT", "50"))

# Name equivalence table (JSON list of [from, to] pairs); empty uses the built-in table
NAME_EQUIVALENCES_FILE = os.getenv("NAME_EQUIVALENCES_FILE", "")

# Uploads
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))  # 10MB

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Environment (production hides error details)
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# CORS
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",") if os.getenv("ALLOWED_ORIGINS") else ["*"]
