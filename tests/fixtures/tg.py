from typing import Callable
from unittest.mock import Mock

import pytest
from _pytest.fixtures import FixtureRequest
from telegram import (
    Bot,
    Chat as TGChat,
    Update,
    User as TGUser,
)

from .mockers import BOT_ID
from .utils import append_to_cls, decode_tg_object, get_id, message_ids

TEST_TOKEN = f'{BOT_ID}:TEST-TOKEN'


@pytest.fixture(scope='class')
def create_bot(request: FixtureRequest) -> Callable:
    def _create_bot():
        return Bot(TEST_TOKEN)

    return append_to_cls(request, _create_bot)


@pytest.fixture(scope='class')
def create_tg_user(request: FixtureRequest) -> Callable:
    def _create_tg_user(**kwargs):
        fields = {
            'id': get_id(),
            'first_name': 'user',
            'is_bot': False,
            **kwargs,
        }
        return TGUser(**fields)

    return append_to_cls(request, _create_tg_user)


@pytest.fixture(scope='class')
def create_tg_bot_user(request: FixtureRequest, create_tg_user) -> Callable:
    def _create_tg_bot_user():
        return create_tg_user(id=BOT_ID, is_bot=True, first_name='bot', username='foobot')

    return append_to_cls(request, _create_tg_bot_user)


@pytest.fixture(scope='class')
def create_tg_chat(request: FixtureRequest) -> Callable:
    def _create_tg_chat(**kwargs):
        fields = {
            'id': -100000000000,
            'type': TGChat.SUPERGROUP,
            'title': 'test chat',
            **kwargs,
        }
        return TGChat(**fields)

    return append_to_cls(request, _create_tg_chat)


@pytest.fixture(scope='class')
def create_message_data(request: FixtureRequest, create_tg_user, create_tg_chat) -> Callable:
    def _create_message_data(user=None, chat=None, reply_to_message=None, reply_markup=None, **kwargs):
        data = {
            'message_id': next(message_ids),
            'date': 1564646464,
            'from': decode_tg_object(user, create_tg_user().to_dict()),
            'chat': decode_tg_object(chat, create_tg_chat().to_dict()),
            **kwargs,
        }
        if reply_to_message is not None:
            data['reply_to_message'] = decode_tg_object(reply_to_message)
        if reply_markup is not None:
            data['reply_markup'] = decode_tg_object(reply_markup)
        return data

    return append_to_cls(request, _create_message_data)


@pytest.fixture(scope='class')
def create_context(request, create_bot):
    def _create_context(bot=None, args=None, match=None):
        context = Mock()
        context.bot = bot or create_bot()
        context.args = args or []
        context.match = match
        return context

    return append_to_cls(request, _create_context)


@pytest.fixture(scope='class')
def create_update(
    request: FixtureRequest,
    create_bot,
    create_tg_user,
    create_message_data,
) -> Callable:
    def _create_update(
        bot=None,
        user=None,
        message=None,
        callback_query: str = None,
        **message_fields,
    ):
        """
        Message update by default.
        With `callback_query` - button press on the `message`, inline message if it's missing.
        """
        bot = bot or create_bot()
        user = decode_tg_object(user, create_tg_user().to_dict())
        update = {'update_id': 486565656}

        if callback_query is not None:
            query = {
                'id': str(get_id()),
                'from': user,
                'chat_instance': '-4848484848',
                'data': callback_query,
            }
            if message:
                query['message'] = decode_tg_object(message)
            update['callback_query'] = query
        else:
            message = decode_tg_object(message, None)
            update['message'] = message or create_message_data(user=user, **message_fields)

        return Update.de_json(update, bot)

    return append_to_cls(request, _create_update)
