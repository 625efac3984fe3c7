from .base import *  # noqa: F403
from .base import INSTALLED_APPS
from .base import MIDDLEWARE
from .base import env

USE_DOCKER = env.bool("USE_DOCKER", default=False)

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = True
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="kq0m3VnYb7sLw2JtR8cXf4HpZ6aEoU1yGdNiT5rQjKvB9xMhWeS3CuLz7DgAnPbF",
)
ALLOWED_HOSTS = ["localhost", "0.0.0.0", "127.0.0.1", "training-backend"]  # noqa: S104

# CACHES
# ------------------------------------------------------------------------------
# Redis inside docker compose, process memory otherwise
if USE_DOCKER:
    CACHES = {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": env("REDIS_URL", default="redis://redis:6379/0"),
            "OPTIONS": {"CLIENT_CLASS": "django_redis.client.DefaultClient"},
        },
    }
else:
    CACHES = {"default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}}

# SESSIONS
# ------------------------------------------------------------------------------
SESSION_ENGINE = "django.contrib.sessions.backends.cached_db"
SESSION_COOKIE_AGE = 60 * 60 * 24 * 7
SESSION_COOKIE_SAMESITE = "Lax"

# CSRF
# ------------------------------------------------------------------------------
# The planner frontend reads the csrftoken cookie and sends it back as X-CSRFToken
CSRF_TRUSTED_ORIGINS = [env("FRONTEND_URL", default="http://localhost:3000")]
CSRF_COOKIE_SAMESITE = "Lax"
CSRF_COOKIE_HTTPONLY = False

# EMAIL
# ------------------------------------------------------------------------------
# Invitations land in mailpit under docker, on the console otherwise
if USE_DOCKER:
    EMAIL_BACKEND = "django.core.mail.backends.smtp.EmailBackend"
    EMAIL_HOST = env("EMAIL_HOST", default="mailpit")
    EMAIL_PORT = 1025
else:
    EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"

INVITE_ORGANIZER_EMAIL = env("INVITE_ORGANIZER_EMAIL", default="planner@localhost")

# CELERY
# ------------------------------------------------------------------------------
# Without a broker, invitation tasks run inline in the request
if not USE_DOCKER:
    CELERY_TASK_ALWAYS_EAGER = env.bool("CELERY_TASK_ALWAYS_EAGER", default=True)
    CELERY_TASK_EAGER_PROPAGATES = True

# TIMELINE
# ------------------------------------------------------------------------------
TIMELINE_DEFAULT_GRANULARITY = env("TIMELINE_DEFAULT_GRANULARITY", default="day")

# LOGGING
# ------------------------------------------------------------------------------
LOGGING["loggers"]["training_backend"]["level"] = env(  # noqa: F405
    "TRAINING_BACKEND_LOG_LEVEL",
    default="DEBUG",
)

# WhiteNoise
# ------------------------------------------------------------------------------
INSTALLED_APPS = ["whitenoise.runserver_nostatic", *INSTALLED_APPS]

# django-debug-toolbar
# ------------------------------------------------------------------------------
INSTALLED_APPS += ["debug_toolbar"]
MIDDLEWARE += ["debug_toolbar.middleware.DebugToolbarMiddleware"]
DEBUG_TOOLBAR_CONFIG = {
    "DISABLE_PANELS": [
        "debug_toolbar.panels.redirects.RedirectsPanel",
        "debug_toolbar.panels.profiling.ProfilingPanel",
    ],
}
INTERNAL_IPS = ["127.0.0.1"]

# django-extensions
# ------------------------------------------------------------------------------
INSTALLED_APPS += ["django_extensions"]
