"""
Configuration management for the Slack agent relay.

Loads environment variables from .env file and provides typed access to configuration.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


class Config:
    """Configuration class for the Slack agent relay."""

    # Slack App Configuration
    SLACK_BOT_TOKEN = os.getenv("SLACK_BOT_TOKEN", "")
    SLACK_SIGNING_SECRET = os.getenv("SLACK_SIGNING_SECRET", "")

    # Agent Service Configuration (endpoint, timeout and API key are read by
    # infra.config.InfraConfig)
    AGENT_BACKEND = os.getenv("AGENT_BACKEND", "langbase")
    OWNER_LOGIN = os.getenv("OWNER_LOGIN", "")
    AGENT_NAME = os.getenv("AGENT_NAME", "")

    # Server
    AGENT_PORT = int(os.getenv("AGENT_PORT", "8000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Environment
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    @classmethod
    def missing(cls) -> list[str]:
        """Names of required settings that are not set."""
        required = ["SLACK_BOT_TOKEN", "SLACK_SIGNING_SECRET"]
        return [key for key in required if not getattr(cls, key)]

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        missing = cls.missing()

        if missing:
            print(f"⚠️  Missing required environment variables: {', '.join(missing)}")
            print(f"   Please set them in .env file")
            return False

        return True


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    print(f"  Slack Bot Token: {'✓ Set' if Config.SLACK_BOT_TOKEN else '✗ Missing'}")
    print(f"  Slack Signing Secret: {'✓ Set' if Config.SLACK_SIGNING_SECRET else '✗ Missing'}")
    print(f"  Agent Backend: {Config.AGENT_BACKEND}")
    print(f"  Agent: {Config.OWNER_LOGIN}/{Config.AGENT_NAME}")
    print(f"  Port: {Config.AGENT_PORT}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")
