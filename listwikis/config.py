# listwikis/config.py

import os
import logging
from dotenv import load_dotenv

load_dotenv()


def _csv(value: str):
    return [item.strip() for item in value.split(",") if item.strip()]


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./listwikis.db")
HOSTING_DOMAIN = os.getenv("HOSTING_DOMAIN", "shoutwiki.com")

# Page size limits, as in MediaWiki's ApiBase::LIMIT_BIG1 / LIMIT_BIG2
LIMIT_DEFAULT = int(os.getenv("LIMIT_DEFAULT", "100"))
LIMIT_BIG1 = int(os.getenv("LIMIT_BIG1", "500"))
LIMIT_BIG2 = int(os.getenv("LIMIT_BIG2", "5000"))

# $wgAPIMaxResultSize
API_MAX_RESULT_SIZE = int(os.getenv("API_MAX_RESULT_SIZE", str(8 * 1024 * 1024)))

HIGH_LIMIT_GROUPS = _csv(os.getenv("HIGH_LIMIT_GROUPS", "bot,sysop,staff"))
STAFF_GROUP = os.getenv("STAFF_GROUP", "staff")
EXTRA_LANGUAGE_CODES = _csv(os.getenv("EXTRA_LANGUAGE_CODES", ""))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
