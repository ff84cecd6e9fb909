from bot.wrapper import HandlerWrapper


def help_line(handler: HandlerWrapper) -> str:
    """`/r /react - summary`, summary is the first line of the handler docstring."""
    names = ' '.join(f"/{name}" for name in handler.commands)
    summary = (handler.__doc__ or '').strip().split('\n', 1)[0]
    return f"{names} - {summary}" if summary else names


def get_commands_help(*handlers: HandlerWrapper):
    return [help_line(h) for h in handlers if h.commands]


def normalize_text(text: str) -> str:
    """Strip indentation of triple-quoted text, drop empty lines."""
    return '\n'.join(filter(None, map(str.strip, text.splitlines())))
