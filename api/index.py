# api/index.py
import os
import sys
from pathlib import Path

from serverless_wsgi import handle_request
from django.core.wsgi import get_wsgi_application

# Add the project root to Python path
BASE_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "review360.settings")

# WSGI app is built once per cold start
application = get_wsgi_application()


def handler(event, context):
    # Adapt the incoming serverless event to the Django WSGI app
    return handle_request(application, event, context)
