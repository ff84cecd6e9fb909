from os import getenv
from urllib.parse import urlparse

TG_BOT_TOKEN = getenv('TG_BOT_TOKEN')

# polling is used if webhook url is not set
WEBHOOK_URL = getenv('WEBHOOK_URL')
WEBHOOK_PATH = urlparse(WEBHOOK_URL).path.lstrip('/') if WEBHOOK_URL else ''
WEBHOOK_LISTEN = getenv('WEBHOOK_LISTEN', '0.0.0.0')
WEBHOOK_PORT = int(getenv('WEBHOOK_PORT', '8443'))
WEBHOOK_SECRET = getenv('WEBHOOK_SECRET')
