from unittest.mock import Mock

import pytest
from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.core.management import CommandError, call_command
from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import BadRequest, Forbidden, TimedOut
from telegram.ext import CallbackQueryHandler, CommandHandler

from bot import core, panel
from bot.core import command_help, handle_error
from bot.core.utils import get_commands_help, normalize_text
from bot.dispatcher import extract_handlers, inspect_handlers, setup_application, sort_by_type
from bot.markup import button_text, gen_buttons, make_panel_keyboard, read_panel
from bot.panel import (
    command_down,
    command_heart,
    command_react,
    command_up,
    handle_button_callback,
)
from bot.wrapper import HandlerWrapper
from reactions import REACTIONS, ButtonPayload, Reaction, empty_panel, get_codec
from tests.fixtures.mockers import BOT_ID

BARE = [r.emoji for r in REACTIONS]


def panel_row(markup: InlineKeyboardMarkup, codec=None):
    codec = codec or get_codec('json')
    return [
        (button.text, codec.decode(button.callback_data))
        for button in markup.inline_keyboard[0]
    ]


def make_row(**users):
    return [ButtonPayload(r, users.get(str(r), [])) for r in REACTIONS]


class TestMarkup:
    codec = get_codec('json')

    def test_button_text(self):
        assert button_text(ButtonPayload(Reaction.approve, [])) == '👍'
        assert button_text(ButtonPayload(Reaction.approve, [1])) == '👍 1'
        assert button_text(ButtonPayload(Reaction.laugh, [1, 2, 3])) == '😂 3'

    def test_gen_buttons(self):
        buttons = gen_buttons(make_row(sad=[7]), self.codec)
        assert [b.text for b in buttons] == [*BARE[:-1], f'{Reaction.sad.emoji} 1']
        assert buttons[0].callback_data == '{"reaction":"heart","users":[]}'
        assert buttons[-1].callback_data == '{"reaction":"sad","users":[7]}'

    def test_make_panel_keyboard(self):
        kb = make_panel_keyboard(empty_panel(), self.codec).inline_keyboard
        assert len(kb) == 1
        assert [b.text for b in kb[0]] == BARE

    def test_make_panel_keyboard_overflow(self):
        users = list(range(1000000, 1000020))
        assert make_panel_keyboard(make_row(heart=users), self.codec) is None
        # compact format fits more
        assert make_panel_keyboard(make_row(heart=users[:5]), self.codec) is None
        assert make_panel_keyboard(make_row(heart=users[:5]), get_codec('compact')) is not None

    def test_read_panel(self):
        row = make_row(approve=[1, 2], anger=[3])
        assert read_panel(make_panel_keyboard(row, self.codec), self.codec) == row

    def test_read_panel_foreign(self):
        assert read_panel(None, self.codec) is None

        buttons = gen_buttons(empty_panel(), self.codec)
        assert read_panel(InlineKeyboardMarkup([buttons[:3], buttons[3:]]), self.codec) is None

        buttons[2] = InlineKeyboardButton('b', callback_data='button:b')
        assert read_panel(InlineKeyboardMarkup.from_row(buttons), self.codec) is None

        url_button = InlineKeyboardButton('by user', url='https://t.me/user')
        assert read_panel(InlineKeyboardMarkup.from_button(url_button), self.codec) is None


@pytest.mark.usefixtures(
    'mock_bot',
    'create_update',
    'create_context',
    'create_message_data',
    'create_tg_user',
    'create_tg_bot_user',
)
class TestPanelCommands:
    def command_update(self, text='/r', reply=True, reply_from=None, user=None):
        reply_to_message = None
        if reply:
            reply_to_message = self.create_message_data(user=reply_from, text='look at this')
        update = self.create_update(user=user, text=text, reply_to_message=reply_to_message)
        return update

    def sent_panel(self):
        Bot.send_message.assert_awaited_once()
        return Bot.send_message.await_args.kwargs

    def assert_deleted(self, update):
        msg = update.effective_message
        Bot.delete_message.assert_awaited_once_with(chat_id=msg.chat_id, message_id=msg.message_id)

    @pytest.mark.asyncio
    async def test_panel_created(self):
        update = self.command_update()
        target = update.effective_message.reply_to_message

        await command_react(update, self.create_context())

        kwargs = self.sent_panel()
        assert kwargs['chat_id'] == target.chat_id
        assert kwargs['reply_parameters'].message_id == target.message_id
        assert kwargs['disable_notification'] is True
        assert kwargs['text'] == '\u034f'
        assert panel_row(kwargs['reply_markup']) == [
            (r.emoji, (r, [])) for r in REACTIONS
        ]
        self.assert_deleted(update)

    @pytest.mark.asyncio
    async def test_not_a_reply(self):
        update = self.command_update(reply=False)

        await command_react(update, self.create_context())

        Bot.send_message.assert_not_awaited()
        self.assert_deleted(update)

    @pytest.mark.asyncio
    async def test_reply_to_bot_only(self, settings):
        settings.PANEL_REPLY_TO_BOT_ONLY = True

        update = self.command_update()
        await command_react(update, self.create_context())
        Bot.send_message.assert_not_awaited()
        self.assert_deleted(update)

        Bot.delete_message.reset_mock()
        update = self.command_update(reply_from=self.create_tg_bot_user())
        await command_react(update, self.create_context())
        kwargs = self.sent_panel()
        assert kwargs['reply_parameters'].message_id == update.effective_message.reply_to_message.message_id
        self.assert_deleted(update)

    @pytest.mark.asyncio
    async def test_reply_to_bot_only_disabled(self, settings):
        settings.PANEL_REPLY_TO_BOT_ONLY = False
        update = self.command_update(reply_from=self.create_tg_user())
        await command_react(update, self.create_context())
        self.sent_panel()

    @pytest.mark.asyncio
    @pytest.mark.parametrize('handler, reaction', [
        (command_heart, Reaction.heart),
        (command_up, Reaction.approve),
        (command_down, Reaction.disapprove),
    ])
    async def test_shortcuts(self, handler, reaction):
        user = self.create_tg_user(id=42)
        update = self.command_update(user=user)

        await handler(update, self.create_context())

        row = panel_row(self.sent_panel()['reply_markup'])
        for text, payload in row:
            if payload.reaction == reaction:
                assert payload.users == [42]
                assert text == f'{reaction.emoji} 1'
            else:
                assert payload.users == []
                assert text == payload.reaction.emoji
        self.assert_deleted(update)

    @pytest.mark.parametrize('handler', [command_react, command_heart, command_up, command_down])
    def test_edited_command_ignored(self, handler):
        update = self.command_update()
        data = update.effective_message.to_dict()
        bot = update.get_bot()
        edited = Update.de_json({'update_id': 2, 'edited_message': data}, bot)

        assert handler.handler.filters.check_update(update)
        assert not handler.handler.filters.check_update(edited)

    @pytest.mark.asyncio
    async def test_compact_payload(self, settings):
        settings.PANEL_PAYLOAD_FORMAT = 'compact'
        await command_react(self.command_update(), self.create_context())

        buttons = self.sent_panel()['reply_markup'].inline_keyboard[0]
        assert [b.callback_data for b in buttons] == [f'{r}:' for r in REACTIONS]

    @pytest.mark.asyncio
    async def test_delete_failed(self):
        Bot.delete_message.side_effect = BadRequest("Message can't be deleted")
        update = self.command_update()

        await command_react(update, self.create_context())

        self.sent_panel()
        self.assert_deleted(update)

    @pytest.mark.asyncio
    async def test_send_failed(self):
        Bot.send_message.side_effect = Forbidden('bot was kicked from the supergroup chat')
        update = self.command_update()

        await command_react(update, self.create_context())

        self.assert_deleted(update)


@pytest.mark.usefixtures(
    'mock_bot',
    'create_update',
    'create_context',
    'create_message_data',
    'create_tg_user',
    'create_tg_bot_user',
)
class TestButtonCallback:
    codec = get_codec('json')

    def press(self, reaction, user_id=42, row=None, data=None):
        row = row or empty_panel()
        message = self.create_message_data(
            user=self.create_tg_bot_user(),
            text='\u034f',
            reply_markup=make_panel_keyboard(row, self.codec),
        )
        if data is None:
            users = next(p.users for p in row if p.reaction == reaction)
            data = self.codec.encode(reaction, users)
        return self.create_update(
            user=self.create_tg_user(id=user_id),
            message=message,
            callback_query=data,
        )

    def edited_row(self, update):
        msg = update.effective_message
        Bot.edit_message_reply_markup.assert_awaited_once()
        kwargs = Bot.edit_message_reply_markup.await_args.kwargs
        assert kwargs['chat_id'] == msg.chat_id
        assert kwargs['message_id'] == msg.message_id
        return panel_row(kwargs['reply_markup'])

    def answer(self, update):
        Bot.answer_callback_query.assert_awaited_once()
        args = Bot.answer_callback_query.await_args
        assert args.args == (update.callback_query.id,)
        return args.kwargs

    @pytest.mark.asyncio
    async def test_press_fresh_panel(self):
        update = self.press(Reaction.approve)

        await handle_button_callback(update, self.create_context())

        row = self.edited_row(update)
        assert row[1] == ('👍 1', (Reaction.approve, [42]))
        assert [text for text, _ in row] == [BARE[0], '👍 1', *BARE[2:]]
        assert all(p.users == [] for _, p in row if p.reaction != Reaction.approve)
        assert self.answer(update) == {'text': '👍'}

    @pytest.mark.asyncio
    async def test_press_moves_reaction(self):
        update = self.press(Reaction.laugh, row=make_row(approve=[42]))

        await handle_button_callback(update, self.create_context())

        row = dict((p.reaction, (text, p.users)) for text, p in self.edited_row(update))
        assert row[Reaction.approve] == ('👍', [])
        assert row[Reaction.laugh] == ('😂 1', [42])
        assert self.answer(update) == {'text': '😂'}

    @pytest.mark.asyncio
    async def test_press_not_exclusive(self, settings):
        settings.PANEL_EXCLUSIVE_REACTIONS = False
        update = self.press(Reaction.laugh, row=make_row(approve=[42]))

        await handle_button_callback(update, self.create_context())

        row = dict((p.reaction, (text, p.users)) for text, p in self.edited_row(update))
        assert row[Reaction.approve] == ('👍 1', [42])
        assert row[Reaction.laugh] == ('😂 1', [42])

    @pytest.mark.asyncio
    async def test_press_again_removes_reaction(self):
        update = self.press(Reaction.sad, row=make_row(sad=[1, 42, 2]))

        await handle_button_callback(update, self.create_context())

        row = self.edited_row(update)
        assert row[-1] == (f'{Reaction.sad.emoji} 2', (Reaction.sad, [1, 2]))
        assert self.answer(update) == {'text': '❎'}

    @pytest.mark.asyncio
    async def test_bad_payload(self):
        data = self.codec.encode(Reaction.approve, [])[:-3]
        update = self.press(Reaction.approve, data=data)

        await handle_button_callback(update, self.create_context())

        Bot.edit_message_reply_markup.assert_not_awaited()
        assert self.answer(update) == {}

    @pytest.mark.asyncio
    async def test_unknown_reaction(self):
        update = self.press(Reaction.approve, data='{"reaction":"love","users":[]}')

        await handle_button_callback(update, self.create_context())

        Bot.edit_message_reply_markup.assert_not_awaited()
        self.answer(update)

    @pytest.mark.asyncio
    async def test_foreign_panel(self):
        message = self.create_message_data(
            user=self.create_tg_bot_user(),
            text='post',
            reply_markup=InlineKeyboardMarkup.from_row([
                InlineKeyboardButton('a', callback_data=self.codec.encode(Reaction.heart, [])),
                InlineKeyboardButton('b', callback_data='button:b'),
            ]),
        )
        update = self.create_update(
            message=message,
            callback_query=self.codec.encode(Reaction.heart, []),
        )

        await handle_button_callback(update, self.create_context())

        Bot.edit_message_reply_markup.assert_not_awaited()
        assert self.answer(update) == {}

    @pytest.mark.asyncio
    async def test_message_is_missing(self):
        update = self.create_update(callback_query=self.codec.encode(Reaction.heart, []))

        await handle_button_callback(update, self.create_context())

        Bot.edit_message_reply_markup.assert_not_awaited()
        assert self.answer(update)['show_alert'] is True

    @pytest.mark.asyncio
    async def test_panel_is_full(self):
        users = list(range(1000000, 1000004))
        update = self.press(Reaction.heart, user_id=2000000, row=make_row(heart=users))

        await handle_button_callback(update, self.create_context())

        Bot.edit_message_reply_markup.assert_not_awaited()
        assert 'Too many' in self.answer(update)['text']

    @pytest.mark.asyncio
    async def test_edit_failed(self):
        Bot.edit_message_reply_markup.side_effect = TimedOut()
        update = self.press(Reaction.approve)

        await handle_button_callback(update, self.create_context())

        assert self.answer(update) == {}

    @pytest.mark.asyncio
    async def test_answer_failed(self):
        Bot.answer_callback_query.side_effect = BadRequest('Query is too old')
        update = self.press(Reaction.approve)

        await handle_button_callback(update, self.create_context())

        self.edited_row(update)
        self.answer(update)

    @pytest.mark.asyncio
    async def test_unexpected_error_is_answered(self, mocker):
        mocker.patch('bot.panel.query_callback_handlers.press', side_effect=KeyError('boom'))
        update = self.press(Reaction.approve)

        with pytest.raises(KeyError):
            await handle_button_callback(update, self.create_context())

        Bot.edit_message_reply_markup.assert_not_awaited()
        self.answer(update)


@pytest.mark.usefixtures('mock_bot', 'create_update', 'create_context')
class TestCoreCommands:
    def test_get_commands_help(self):
        docs = list(get_commands_help(command_help, command_react))
        assert docs[0] == '/help /h - Show list of commands.'
        assert docs[1].startswith('/r /react - ')

    def test_commands_help_summary(self):
        async def callback(update, context):
            """
            First line.

            Details that stay out of /help.
            """

        async def bare(update, context):
            pass

        documented = HandlerWrapper(callback, CommandHandler, False, ('x', 'y'))
        undocumented = HandlerWrapper(bare, CommandHandler, False, 'z')
        assert get_commands_help(documented, undocumented, handle_button_callback) == [
            '/x /y - First line.',
            '/z',
        ]

    def test_normalize_text(self):
        assert normalize_text('\n  a\n    b\n') == 'a\nb'
        assert normalize_text('  a\n\n  b') == 'a\nb'

    @pytest.mark.asyncio
    async def test_help(self):
        update = self.create_update(text='/help')

        await command_help(update, self.create_context())

        Bot.send_message.assert_awaited_once()
        text = Bot.send_message.await_args.kwargs['text']
        assert '/r /react' in text
        assert '/heart' in text

    @pytest.mark.asyncio
    async def test_handle_error(self, mocker):
        from bot.core.misc_handlers import logger
        mocker.spy(logger, 'error')
        context = self.create_context()
        context.error = ValueError('boom')

        await handle_error(self.create_update(), context)

        assert logger.error.call_count == 2


class TestDispatcher:
    def test_extract_handlers(self):
        handlers = extract_handlers(panel)

        assert {h.name for h in handlers} == {
            'command_react',
            'command_heart',
            'command_up',
            'command_down',
            'handle_button_callback',
        }
        assert all(isinstance(h, HandlerWrapper) for h in handlers)

    def test_inspect_handlers(self, mocker):
        from bot.dispatcher import logger
        mocker.spy(logger, 'debug')
        inspect_handlers(extract_handlers(core))
        assert logger.debug.call_count == 1

    def test_sort_by_type(self):
        async def callback(update, context):
            pass

        handlers = [
            HandlerWrapper(callback, CallbackQueryHandler),
            HandlerWrapper(callback, CommandHandler, False, 'a'),
            HandlerWrapper(callback, CommandHandler, False, 'b'),
        ]
        sort_by_type(handlers)
        assert handlers[0].handler_class == CommandHandler
        assert handlers[1].handler_class == CommandHandler
        assert handlers[2].handler_class == CallbackQueryHandler

    def test_wrapper(self):
        assert command_react.commands == ['r', 'react']
        assert command_heart.commands == ['heart']
        assert handle_button_callback.commands == []
        assert command_react.handler.block is True
        assert handle_button_callback.handler.block is False

    def test_setup_application(self):
        application = Mock()
        setup_application(application, inspect=False)

        handlers = [c.args[0] for c in application.add_handler.call_args_list]
        assert len(handlers) == 7
        assert isinstance(handlers[0], CommandHandler)
        assert isinstance(handlers[-1], CallbackQueryHandler)
        application.add_error_handler.assert_called_once_with(handle_error)


class TestStartup:
    def test_runbot_without_token(self, settings, mocker):
        run = mocker.patch('bot.management.commands.runbot.run')
        settings.TG_BOT_TOKEN = None

        with pytest.raises(CommandError):
            call_command('runbot')
        run.assert_not_called()

    def test_runbot(self, settings, mocker):
        run = mocker.patch('bot.management.commands.runbot.run')
        settings.TG_BOT_TOKEN = f'{BOT_ID}:TOKEN'

        call_command('runbot')
        run.assert_called_once()

    def test_bad_payload_format(self, settings):
        settings.PANEL_PAYLOAD_FORMAT = 'xml'
        with pytest.raises(ImproperlyConfigured):
            apps.get_app_config('bot').ready()
