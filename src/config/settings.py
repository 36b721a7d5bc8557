import re
from pathlib import Path

import structlog
from decouple import Csv, config

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = config("DJANGO_SECRET_KEY", default="django-insecure-catalog-dev-only")

DEBUG = config("DEBUG", default=False, cast=bool)

ALLOWED_HOSTS = config("ALLOWED_HOSTS", default="127.0.0.1,localhost,testserver", cast=Csv())

# Application definition
INSTALLED_APPS = [
    # Third-party
    "rest_framework",
    "corsheaders",
    # Local Apps (Modules)
    "modules.core",
    "modules.accounts",
    "modules.products",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "modules.core.middleware.CorrelationIdMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

WSGI_APPLICATION = "config.wsgi.application"

# No relational database: the catalog lives in a flat JSON document.
DATABASES = {}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

APPEND_SLASH = False

# ---------------------------------------------------------------------------
# Catalog storage
# ---------------------------------------------------------------------------
CATALOG_DATA_DIR = Path(config("DATA_DIR", default=str(BASE_DIR.parent / "data")))

PRODUCTS_FILE = Path(
    config("PRODUCTS_FILE", default=str(CATALOG_DATA_DIR / "products.json"))
)
PRODUCTS_LEGACY_FILE = Path(
    config("PRODUCTS_LEGACY_FILE", default=str(CATALOG_DATA_DIR / "Product.json"))
)
USERS_FILE = Path(config("USERS_FILE", default=str(CATALOG_DATA_DIR / "users.json")))

# ---------------------------------------------------------------------------
# Catalog security
#
# Empty secrets are allowed so the process can boot, but every API-key and
# bearer check denies while they are unset. There is no fallback secret.
# ---------------------------------------------------------------------------
CATALOG_API_KEY = config("API_KEY", default="")
CATALOG_API_KEY_HEADER = "x-api-key"
CATALOG_JWT_SECRET = config("JWT_SECRET", default="")
CATALOG_JWT_ALGORITHM = config("JWT_ALGORITHM", default="HS256")
CATALOG_TOKEN_LIFETIME = config("TOKEN_LIFETIME_SECONDS", default=3600, cast=int)

# DRF Configuration: authorization is declared per view through guards
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_CONTENT_NEGOTIATION_CLASS": "modules.core.negotiation.AcceptHeaderNegotiation",
    "DEFAULT_RENDERER_CLASSES": [
        "modules.products.renderers.ProductJSONRenderer",
        "modules.products.renderers.ProductXMLRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "modules.products.parsers.ProductJSONParser",
        "modules.products.parsers.ProductXMLParser",
        "modules.products.parsers.ProductTextXMLParser",
    ],
    "EXCEPTION_HANDLER": "modules.core.exception_handler.catalog_exception_handler",
}

# CORS
CORS_ALLOWED_ORIGINS = config(
    "CORS_ALLOWED_ORIGINS", default="http://localhost:5173,http://localhost:3000", cast=Csv()
)
CORS_ALLOW_HEADERS = (
    "accept",
    "authorization",
    "content-type",
    "x-api-key",
    "x-request-id",
)
CORS_EXPOSE_HEADERS = ("x-request-id",)

# ---------------------------------------------------------------------------
# Structured Logging (structlog + Django LOGGING)
# ---------------------------------------------------------------------------
SENSITIVE_PATTERN = re.compile(
    r"(password|passwd|secret|token|authorization|x-api-key|api_key|apikey)"
    r"""([=:]\s*["']?)(?:bearer\s+)?([^\s,}"']+)""",
    re.IGNORECASE,
)
SENSITIVE_KEYS = frozenset(
    {"password", "secret", "token", "authorization", "api_key", "x-api-key"}
)


def mask_sensitive_data(_, __, event_dict):
    """Processor that masks passwords, API keys and tokens in log values."""
    for key, value in list(event_dict.items()):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = "***MASKED***"
        elif isinstance(value, str):
            event_dict[key] = SENSITIVE_PATTERN.sub("***MASKED***", value)
    return event_dict


# Shared processors used by both structlog and stdlib logging
_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    mask_sensitive_data,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

structlog.configure(
    processors=[
        *_shared_processors,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processors": [
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
            "foreign_pre_chain": _shared_processors,
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "django.server": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}
