import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Config:
    """Application configuration"""

    # Static content committed into every repository
    CONTENT_DIR = os.getenv('INFRA_CONTENT_DIR', str(PROJECT_ROOT / 'content'))

    # Optional YAML catalog replacing the built-in one
    CATALOG_FILE = os.getenv('INFRA_CATALOG_FILE')

    # Identity used for commits made by the engine
    COMMIT_AUTHOR = os.getenv('INFRA_COMMIT_AUTHOR', 'powerd6/infrastructure')
    COMMIT_EMAIL = os.getenv('INFRA_COMMIT_EMAIL', 'infrastructure@powerd6.org')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
