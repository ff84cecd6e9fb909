from .mockers import mock_bot
from .tg import (
    create_bot,
    create_context,
    create_message_data,
    create_tg_bot_user,
    create_tg_chat,
    create_tg_user,
    create_update,
)
