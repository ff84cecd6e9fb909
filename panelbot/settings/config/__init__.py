from .BOT import *
from .PANEL import *
from .LOGGER import *
