import itertools
import uuid
from typing import Union

from _pytest.fixtures import FixtureRequest
from telegram import TelegramObject

message_ids = itertools.count(1)


def append_to_cls(request: FixtureRequest, func, name=None):
    name = name or func.__name__.strip('_')
    if request.cls:
        setattr(request.cls, name, staticmethod(func))
    return func


def get_id():
    # generate 32 bit number, telegram ids are ints
    return uuid.uuid4().int >> 96


def decode_tg_object(obj: Union[TelegramObject, dict, None], default=None):
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj
    return obj.to_dict()
