import os
from pathlib import Path

from .config import *

BASE_DIR = str(Path(os.path.abspath(__file__)).parents[2])
SECRET_KEY = os.getenv('SECRET_KEY', 'panelbot')
DEBUG = os.getenv('DEBUG', '0') == '1'

# Application definition

INSTALLED_APPS = [
    'bot.apps.BotConfig',
]

# reactions are stored in the messages themselves
DATABASES = {}

# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = False

USE_TZ = True
