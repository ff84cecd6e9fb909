import json
import logging
from typing import List, NamedTuple, Optional, Tuple

import regex

from .kinds import Reaction

logger = logging.getLogger(__name__)


class ButtonPayload(NamedTuple):
    reaction: Reaction
    users: List[int]


class PayloadError(ValueError):
    pass


class PayloadFormat:
    """Turns (tag, users) into string and back. Validation is done by codec."""
    name = None

    def dumps(self, tag: str, users: List[int]) -> str:
        raise NotImplementedError

    def loads(self, data: str) -> Tuple[object, object]:
        raise NotImplementedError


class JsonFormat(PayloadFormat):
    """`{"reaction":"approve","users":[42]}`"""
    name = 'json'

    def dumps(self, tag, users):
        return json.dumps({'reaction': tag, 'users': users}, separators=(',', ':'))

    def loads(self, data):
        try:
            obj = json.loads(data)
        except (ValueError, RecursionError) as e:
            raise PayloadError(f"bad json: {e}") from e
        if not isinstance(obj, dict) or set(obj) != {'reaction', 'users'}:
            raise PayloadError(f"unexpected structure: {data[:80]!r}")
        return obj['reaction'], obj['users']


class CompactFormat(PayloadFormat):
    """`approve:42,43`, fits more users into 64 bytes of callback data."""
    name = 'compact'
    # telegram ids fit into 64 bits
    pattern = regex.compile(r'(?P<tag>[a-z]+):(?P<users>-?[0-9]{1,20}(?:,-?[0-9]{1,20})*)?')

    def dumps(self, tag, users):
        return f"{tag}:{','.join(map(str, users))}"

    def loads(self, data):
        m = self.pattern.fullmatch(data)
        if not m:
            raise PayloadError(f"unexpected structure: {data[:80]!r}")
        users = m['users']
        try:
            return m['tag'], [int(u) for u in users.split(',')] if users else []
        except ValueError as e:
            raise PayloadError(f"bad user id: {e}") from e


FORMATS = {f.name: f for f in (JsonFormat(), CompactFormat())}


def is_user_id(value):
    return isinstance(value, int) and not isinstance(value, bool)


class ReactionCodec:
    def __init__(self, fmt: PayloadFormat = FORMATS['json']):
        self.format = fmt

    def encode(self, reaction: Reaction, users: List[int]) -> str:
        return self.format.dumps(str(reaction), list(users))

    def loads(self, data) -> ButtonPayload:
        """Decode payload or raise PayloadError."""
        if isinstance(data, bytes):
            try:
                data = data.decode('utf-8')
            except UnicodeDecodeError as e:
                raise PayloadError(f"not utf-8: {e}") from e
        if not isinstance(data, str) or not data:
            raise PayloadError(f"empty or non-string payload: {data!r}")

        tag, users = self.format.loads(data)
        reaction = Reaction.from_tag(tag)
        if reaction is None:
            raise PayloadError(f"unknown reaction: {tag!r}")
        if not isinstance(users, list) or not all(map(is_user_id, users)):
            raise PayloadError(f"bad users: {users!r}")
        if len(set(users)) != len(users):
            raise PayloadError(f"duplicated users: {users!r}")
        return ButtonPayload(reaction, users)

    def decode(self, data) -> Optional[ButtonPayload]:
        """Decode payload or return None if it wasn't made by this codec."""
        try:
            return self.loads(data)
        except PayloadError as e:
            logger.debug(f"can't decode payload: {e}")
            return None


def get_codec(name: str) -> ReactionCodec:
    if name not in FORMATS:
        raise ValueError(f"Unknown payload format {name!r}, expected one of: {', '.join(FORMATS)}.")
    return ReactionCodec(FORMATS[name])
