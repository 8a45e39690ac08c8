"""
Utility functions for the receipt resolver
"""

import os
import re
import sys
from pathlib import Path
from typing import Dict, Optional

import yaml
from loguru import logger


_WHITESPACE = re.compile(r'\s+')

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "resolver_config.yaml"


def default_config() -> Dict:
    """Return default configuration"""
    return {
        'server': {
            'host': '0.0.0.0',
            'port': 2268,
        },
        'storage': {
            'db_path': './db.db',
        },
        'logging': {
            'file': 'logs/receipt_resolver.log',
            'level': 'INFO',
        },
        'sources': {
            'cbe': {
                'url_template': 'https://apps.cbe.com.et:100/?id={transaction_id}{suffix}',
                'id_suffix': 'W09338067',
            },
            'telebirr': {
                'url_template': 'https://transactioninfo.ethiotelecom.et/receipt/{transaction_id}',
            },
        },
        'fetch': {
            'timeout_seconds': None,
        },
    }


def _merge(base: Dict, override: Dict) -> Dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_path: Optional[str] = None) -> Dict:
    """
    Load configuration from YAML file, layered over the defaults

    Args:
        config_path: Path to YAML file (default: $RESOLVER_CONFIG, then
                     config/resolver_config.yaml)

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        config_path = os.environ.get('RESOLVER_CONFIG', str(DEFAULT_CONFIG_PATH))

    config = default_config()

    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return config

    with open(config_path, 'r', encoding='utf-8') as f:
        loaded = yaml.safe_load(f) or {}

    return _merge(config, loaded)


def flatten_whitespace(text: str) -> str:
    """Collapse line breaks and whitespace runs into single spaces"""
    return _WHITESPACE.sub(' ', text).strip()


def ensure_directory(dir_path: str) -> str:
    """
    Ensure directory exists, create if it doesn't

    Args:
        dir_path: Directory path

    Returns:
        Absolute path to directory
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return str(path.absolute())


# Logging setup helper
def setup_logging(log_file: str = "logs/receipt_resolver.log", level: str = "INFO"):
    """
    Setup logging configuration

    Args:
        log_file: Path to log file
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    # Remove default handler
    logger.remove()

    # Add console handler
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level
    )

    # Add file handler
    log_dir = os.path.dirname(log_file)
    if log_dir:
        ensure_directory(log_dir)
    logger.add(
        log_file,
        rotation="10 MB",
        retention="30 days",
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    )

    logger.info("Logging initialized")
