from .base import *

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = True

ALLOWED_HOSTS = ["*"]

LOGGING['handlers']['file'] = {
    'class': 'logging.FileHandler',
    'filename': BASE_DIR / 'employee_registry.log',
    'formatter': 'verbose',
}
LOGGING['loggers']['employee_registry']['handlers'] = ['console', 'file']
LOGGING['loggers']['employee_registry']['level'] = 'DEBUG'
LOGGING['loggers']['django']['level'] = 'DEBUG'
