"""
Django project configuration for the employee registry.

Settings are split by environment under ``config.settings``; select one
with ``DJANGO_SETTINGS_MODULE``.
"""
