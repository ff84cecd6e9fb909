import logging
from os import getenv

LOGGING_LEVEL = getenv('LOGGING_LEVEL', 'INFO')
LOGGING_LEVEL_ROOT = getenv('LOGGING_LEVEL_ROOT', 'WARNING')
# python-telegram-bot and httpx
LOGGING_LEVEL_TELEGRAM = getenv('LOGGING_LEVEL_TELEGRAM', LOGGING_LEVEL_ROOT)


def colored(string: str, color, just=0):
    return f'\033[{color}m{string.rjust(just)}\033[0m'


for level, name, color in [
    (logging.DEBUG, 'DEBUG', '36'),
    (logging.INFO, 'INFO', '32'),
    (logging.WARNING, 'WARN', '33'),
    (logging.ERROR, 'ERROR', '31'),
    (logging.CRITICAL, 'CRIT', '7;31;31'),
]:
    logging.addLevelName(level, colored(name, color, 5))


def package_logger(level):
    return {
        'handlers': ['console'],
        'level': level,
        'propagate': False,
    }


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': f'[%(asctime)s] %(levelname)s %(name)40s:%(lineno)-3d {colored(">", "36")} %(message)s',
            'datefmt': "%Y/%m/%d %H:%M:%S"
        },
    },
    'handlers': {
        'console': {
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'verbose'
        },
    },
    'loggers': {
        'bot': package_logger(LOGGING_LEVEL),
        'reactions': package_logger(LOGGING_LEVEL),
        'telegram': package_logger(LOGGING_LEVEL_TELEGRAM),
        'httpx': package_logger(LOGGING_LEVEL_TELEGRAM),
        '': package_logger(LOGGING_LEVEL_ROOT),
    }
}
