from typing import List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from telegram.constants import InlineKeyboardButtonLimit

from reactions import ButtonPayload, ReactionCodec


def button_text(payload: ButtonPayload) -> str:
    text = payload.reaction.emoji
    count = len(payload.users)
    if count > 0:
        text = f'{text} {count}'
    return text


def gen_buttons(row: List[ButtonPayload], codec: ReactionCodec):
    result = []
    for payload in row:
        data = codec.encode(payload.reaction, payload.users)
        result.append(InlineKeyboardButton(button_text(payload), callback_data=data))
    return result


def fits(button: InlineKeyboardButton) -> bool:
    size = len(button.callback_data.encode('utf-8'))
    return size <= InlineKeyboardButtonLimit.MAX_CALLBACK_DATA


def make_panel_keyboard(
    row: List[ButtonPayload],
    codec: ReactionCodec,
) -> Optional[InlineKeyboardMarkup]:
    """Return single row keyboard or None if some payload doesn't fit into telegram limit."""
    buttons = gen_buttons(row, codec)
    if not all(map(fits, buttons)):
        return
    return InlineKeyboardMarkup.from_row(buttons)


def read_panel(
    markup: Optional[InlineKeyboardMarkup],
    codec: ReactionCodec,
) -> Optional[List[ButtonPayload]]:
    """Return payloads of the panel or None if markup wasn't created by the bot."""
    if not markup or len(markup.inline_keyboard) != 1:
        return
    row = []
    for button in markup.inline_keyboard[0]:
        payload = codec.decode(button.callback_data)
        if payload is None:
            return
        row.append(payload)
    return row
