"""
WSGI Entry Point for the Portfolio CV Backend

Gunicorn serves `wsgi:app`. Environment variables must be set before
this module is imported.
"""

import os
import sys
import logging

from app import create_app

logging.basicConfig(level=logging.INFO)

config_name = os.environ.get('FLASK_ENV', 'development').lower()

# Validate required environment variables in production
if config_name == 'production':
    required_vars = {
        'SESSION_SECRET': 'Required for signing cookies',
        'DATABASE_URL': 'Required for persistent storage',
        'AUTH_PROVIDER_URL': 'Required to verify admin bearer tokens',
    }
    missing = [f'{name} ({reason})' for name, reason in required_vars.items() if not os.environ.get(name)]
    if missing:
        print('✗ Missing required environment variables:', file=sys.stderr)
        for line in missing:
            print(f'  - {line}', file=sys.stderr)
        sys.exit(1)

# Create app instance for gunicorn
app = create_app(config_name)
