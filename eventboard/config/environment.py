"""Environment configuration module.

Import this before any module that reads environment variables: it loads the
``.env`` file once for the API, the web front and the scripts alike.

Usage:
    from eventboard.config.environment import IS_PRODUCTION_ENVIRONMENT

In production the variables are expected to come from the platform, and the
``.env`` file is normally absent.
"""

import os
import logging
from dotenv import load_dotenv

load_dotenv()

VALID_ENVIRONMENTS = ('development', 'production')

env_setting = os.environ.get('ENVIRONMENT', '').strip().lower()
IS_PRODUCTION_ENVIRONMENT = env_setting == 'production'
ENVIRONMENT_NAME = 'production' if IS_PRODUCTION_ENVIRONMENT else 'development'

if env_setting not in VALID_ENVIRONMENTS:
    logging.warning(
        f"ENVIRONMENT is '{env_setting}', expected one of {VALID_ENVIRONMENTS}. "
        "Running as development."
    )

__all__ = ['IS_PRODUCTION_ENVIRONMENT', 'ENVIRONMENT_NAME']
