"""Database initialization and utilities."""
from models.student import init_db


def initialize_database():
    """Initialize database tables."""
    init_db()
