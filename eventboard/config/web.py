import os

from .environment import IS_PRODUCTION_ENVIRONMENT

class Config:
    # Flask configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev')
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    
    # API configuration
    API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:8000')
    API_TIMEOUT = int(os.getenv('API_TIMEOUT', '30'))

    # Login surface of the identity provider
    LOGIN_URL = os.getenv('LOGIN_URL', '/login')

    SESSION_COOKIE_SECURE = IS_PRODUCTION_ENVIRONMENT
