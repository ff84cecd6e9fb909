from enum import Enum
from typing import Optional

from emoji import emojize


class Reaction(Enum):
    heart = 'heart'
    approve = 'approve'
    disapprove = 'disapprove'
    laugh = 'laugh'
    anger = 'anger'
    sad = 'sad'

    def __str__(self):
        return self.value

    @property
    def emoji(self) -> str:
        return EMOJIS[self]

    @classmethod
    def from_tag(cls, tag) -> Optional['Reaction']:
        """Return reaction for the tag or None if tag is unknown."""
        if not isinstance(tag, str):
            return None
        try:
            return cls(tag)
        except ValueError:
            return None


# buttons are rendered in this order
REACTIONS = (
    Reaction.heart,
    Reaction.approve,
    Reaction.disapprove,
    Reaction.laugh,
    Reaction.anger,
    Reaction.sad,
)

EMOJIS = {
    Reaction.heart: emojize(':red_heart:'),
    Reaction.approve: emojize(':thumbs_up:'),
    Reaction.disapprove: emojize(':thumbs_down:'),
    Reaction.laugh: emojize(':face_with_tears_of_joy:'),
    Reaction.anger: emojize(':angry_face:'),
    Reaction.sad: emojize(':crying_face:'),
}
