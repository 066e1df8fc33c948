"""
Configuration management for the store WhatsApp webhook.

Loads environment variables from .env file and provides typed access to configuration.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


class Config:
    """Configuration class for the webhook service."""

    # Application
    APP_PORT = int(os.getenv("APP_PORT", "8000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Environment
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    # WhatsApp Cloud API
    WHATSAPP_GRAPH_URL = os.getenv("WHATSAPP_GRAPH_URL", "https://graph.facebook.com")
    WHATSAPP_API_VERSION = os.getenv("WHATSAPP_API_VERSION", "v18.0")
    WHATSAPP_TEMPLATE_LANGUAGE = os.getenv("WHATSAPP_TEMPLATE_LANGUAGE", "en_US")
    WHATSAPP_HTTP_TIMEOUT = float(os.getenv("WHATSAPP_HTTP_TIMEOUT", "30.0"))

    @classmethod
    def validate(cls) -> bool:
        """Check the Graph API settings the message client needs."""
        problems = [
            f"{key} is empty"
            for key in ("WHATSAPP_GRAPH_URL", "WHATSAPP_API_VERSION", "WHATSAPP_TEMPLATE_LANGUAGE")
            if not getattr(cls, key)
        ]
        if cls.WHATSAPP_GRAPH_URL and not cls.WHATSAPP_GRAPH_URL.startswith(("http://", "https://")):
            problems.append("WHATSAPP_GRAPH_URL must be an http(s) URL")
        if cls.WHATSAPP_HTTP_TIMEOUT <= 0:
            problems.append("WHATSAPP_HTTP_TIMEOUT must be positive")

        for problem in problems:
            print(f"⚠️  {problem} (check .env)")

        return not problems


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    print(f"  App Port: {Config.APP_PORT}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"  Graph API: {Config.WHATSAPP_GRAPH_URL}/{Config.WHATSAPP_API_VERSION}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")
