"""
ASGI config for the employee registry project.
"""

import os
from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "employee_registry.config.settings.production")

application = get_asgi_application()
