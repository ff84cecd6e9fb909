from .commands import command_help, command_start
from .misc_handlers import handle_error
