from unittest.mock import AsyncMock, PropertyMock

import pytest
from telegram import Bot

BOT_ID = 777000111


@pytest.fixture
def mock_bot(mocker):
    mocker.patch.object(Bot, 'id', new_callable=PropertyMock, return_value=BOT_ID)
    bot_mocks = [
        'send_message',
        'edit_message_reply_markup',
        'delete_message',
        'answer_callback_query',
    ]
    for mock in bot_mocks:
        mocker.patch.object(Bot, mock, new_callable=AsyncMock)
