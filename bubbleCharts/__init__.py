"""Django project package for the bubble chart service."""
