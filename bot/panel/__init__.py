"""
Reactions panel attached to a message.

- reply to a message with `/r` - bot replies with a panel of reaction buttons.
- `/heart`, `/up`, `/down` - same, but with the reaction already added.
- press a button to react, press it again to take the reaction back.

Panel doesn't need any storage: each button keeps its reaction and voters
in callback data, the whole row is rebuilt on every press.
"""

from .commands import command_down, command_heart, command_react, command_up
from .query_callback_handlers import handle_button_callback
