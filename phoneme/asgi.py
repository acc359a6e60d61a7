"""
ASGI configuration for the Phoneme Workspace backend.

It exposes the ASGI callable as a module-level variable named ``application``.
The assistant endpoint is async, so serve with an ASGI server (uvicorn, daphne).

For more information on this file, see
https://docs.djangoproject.com/en/stable/howto/deployment/asgi/
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "phoneme.settings")

application = get_asgi_application()
