"""CORS configuration for the FastAPI application."""

import os

from .environment import IS_PRODUCTION_ENVIRONMENT

# CORS Origins configuration
ALLOWED_ORIGINS = {
    False: ["*"],  # Development - allow all
    True: [        # Production - restricted
        origin.strip()
        for origin in os.environ.get('CORS_ALLOWED_ORIGINS', '').split(',')
        if origin.strip()
    ]
}

# CORS Methods configuration
ALLOWED_METHODS = [
    "GET",      # Listing and reading events
    "POST",     # Creating events
    "PUT",      # Replacing events from the edit form
    "DELETE",   # Removing events
    "OPTIONS"   # Required for CORS preflight
]

# CORS Headers configuration
ALLOWED_HEADERS = [
    "X-User-Id",     # Caller identity for mutating requests
    "Content-Type",  # For request bodies
    "Accept",        # For content negotiation
]

# Additional CORS settings
CORS_CONFIG = {
    "allow_origins": ALLOWED_ORIGINS[IS_PRODUCTION_ENVIRONMENT],
    "allow_credentials": True,
    "allow_methods": ALLOWED_METHODS,
    "allow_headers": ALLOWED_HEADERS,
    "expose_headers": [],
    "max_age": 3600,
}
