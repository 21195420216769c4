"""
Configuration for AI Fitness Coach
Values come from the environment (or a .env file)
"""

import os
import secrets

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default='false'):
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Settings:
    """Application settings read from environment variables"""

    def __init__(self, **overrides):
        # Language model
        self.ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
        self.COACH_MODEL = os.getenv("COACH_MODEL", "claude-3-haiku-20240307")
        self.COACH_TEMPERATURE = float(os.getenv("COACH_TEMPERATURE", "0.7"))
        self.COACH_MAX_TOKENS = int(os.getenv("COACH_MAX_TOKENS", "1000"))

        # Web research search (tavily or serpapi)
        self.WEB_SEARCH_ENABLED = _env_flag("WEB_SEARCH_ENABLED")
        self.SEARCH_API_KEY = os.getenv("SEARCH_API_KEY")
        self.SEARCH_PROVIDER = os.getenv("SEARCH_PROVIDER", "tavily")

        # Flask sessions
        self.SECRET_KEY = os.getenv("SECRET_KEY", secrets.token_hex(32))

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)
