"""Configuration management."""
import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_API_URL = "http://localhost:8080"


class Config:
    """Application configuration."""

    def __init__(self, api_url: Optional[str] = None):
        # Store origin; the only environment-derived setting
        self.API_URL = api_url or os.getenv("CATALOG_API_URL") or DEFAULT_API_URL
