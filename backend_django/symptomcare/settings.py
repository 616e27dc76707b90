"""
Django settings for SymptomCare project.
AI-assisted symptom checker and report history.
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from datetime import timedelta

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Load environment variables explicitly from backend_django/.env
load_dotenv(BASE_DIR / '.env')

# Helpers to parse env
def _csv_env(name: str, default_list: list[str] | None = None) -> list[str]:
    raw = os.getenv(name, '').strip()
    if not raw:
        return default_list or []
    return [x.strip() for x in raw.split(',') if x.strip()]

def _bool_env(name: str, default: bool) -> bool:
    return str(os.getenv(name, '1' if default else '0')).strip().lower() in ('1', 'true', 'yes')

def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-symptomcare-secret-key-change-in-production')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = _bool_env('DEBUG', True)

_default_hosts = ['localhost', '127.0.0.1', '0.0.0.0', '*']
ALLOWED_HOSTS = _csv_env('ALLOWED_HOSTS', _default_hosts)

# Application definition
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third party apps
    'rest_framework',
    'corsheaders',
    'rest_framework_simplejwt',

    # Local apps
    'symptom_app',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'symptomcare.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'symptomcare.wsgi.application'

# Database Configuration
# Supabase/PostgreSQL via DATABASE_URL; sqlite:/// only for local runs and tests
from urllib.parse import urlparse, unquote

database_url = os.getenv('DATABASE_URL')
if not database_url:
    raise RuntimeError("DATABASE_URL is required (PostgreSQL/Supabase) and is not set in .env")

parsed = urlparse(database_url)
if parsed.scheme in ('postgres', 'postgresql'):
    SSL_REQUIRE = _bool_env('DB_SSL_REQUIRE', True)
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': (parsed.path or '/').lstrip('/') or 'postgres',
            'USER': unquote(parsed.username or ''),
            'PASSWORD': unquote(parsed.password or ''),
            'HOST': parsed.hostname or 'localhost',
            'PORT': str(parsed.port or '5432'),
            **({'OPTIONS': {'sslmode': 'require'}} if SSL_REQUIRE else {}),
        }
    }
elif parsed.scheme == 'sqlite':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': parsed.path[1:] if parsed.path.startswith('/') else (parsed.path or ':memory:'),
        }
    }
else:
    raise RuntimeError(f"DATABASE_URL must use postgres/postgresql (or sqlite for local runs), got: {parsed.scheme}")

# REST Framework Configuration
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'rest_framework_simplejwt.authentication.JWTAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.FormParser',
        'rest_framework.parsers.MultiPartParser',
    ]
}

# JWT Configuration
SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=60),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=7),
    'ROTATE_REFRESH_TOKENS': True,
    'UPDATE_LAST_LOGIN': False,

    'ALGORITHM': 'HS256',
    'SIGNING_KEY': SECRET_KEY,

    'AUTH_HEADER_TYPES': ('Bearer',),
    'AUTH_HEADER_NAME': 'HTTP_AUTHORIZATION',
    'USER_ID_FIELD': 'id',
    'USER_ID_CLAIM': 'user_id',
}

# CORS Configuration
_default_cors = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
CORS_ALLOWED_ORIGINS = _csv_env('CORS_ALLOWED_ORIGINS', _default_cors)

# Allow every origin in development. Set to 0/false in production
CORS_ALLOW_ALL_ORIGINS = _bool_env('CORS_ALLOW_ALL_ORIGINS', True)

CORS_ALLOW_CREDENTIALS = True

CSRF_TRUSTED_ORIGINS = _csv_env('CSRF_TRUSTED_ORIGINS', [])

CORS_ALLOW_HEADERS = [
    'accept',
    'authorization',
    'content-type',
    'user-agent',
    'x-csrftoken',
    'x-requested-with',
]

# Custom User Model
AUTH_USER_MODEL = 'symptom_app.User'

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = '/static/'
STATIC_ROOT = os.path.join(BASE_DIR, 'staticfiles')

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Request bodies carry base64 report files (4MB decoded is ~5.4MB encoded)
FILE_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024  # 10MB
DATA_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024   # 10MB


# Logging Configuration
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        },
    },
    'handlers': {
        'file': {
            'level': 'INFO',
            'class': 'logging.FileHandler',
            'filename': 'debug.log',
            'formatter': 'verbose',
        },
        'console': {
            'level': 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['file'],
            'level': 'INFO',
            'propagate': True,
        },
        'symptom_app': {
            'handlers': ['file', 'console'],
            'level': 'INFO',
            'propagate': False,
        },
    },
}

# SymptomCare model settings
# Credential is optional at startup; a missing key fails the request, not the boot
SC_GEMINI_API_KEY = (os.getenv('GOOGLE_GEMINI_API_KEY') or os.getenv('GOOGLE_API_KEY') or '').strip()
SC_SYMPTOM_MODEL = os.getenv('SC_SYMPTOM_MODEL', 'gemini-3-flash-preview').strip()
SC_DIAGNOSIS_MODEL = os.getenv('SC_DIAGNOSIS_MODEL', 'gemini-2.5-flash').strip()

# Report persistence (orm vs supabase)
SC_REPORT_STORE = os.getenv('SC_REPORT_STORE', 'orm').strip().lower()
SC_REPORTS_TABLE = os.getenv('SC_REPORTS_TABLE', 'symptom_reports').strip()
SC_REPORT_FILE_MAX_BYTES = _int_env('SC_REPORT_FILE_MAX_BYTES', 4 * 1024 * 1024)
