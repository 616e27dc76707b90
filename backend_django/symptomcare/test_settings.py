"""Settings used by the pytest suite."""

import os

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ['GOOGLE_GEMINI_API_KEY'] = ''
os.environ['GOOGLE_API_KEY'] = ''

from .settings import *  # noqa: E402,F401,F403

SC_GEMINI_API_KEY = ''
SC_REPORT_STORE = 'orm'

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {'class': 'logging.StreamHandler'},
    },
    'loggers': {
        'symptom_app': {'handlers': ['console'], 'level': 'INFO', 'propagate': True},
    },
}
