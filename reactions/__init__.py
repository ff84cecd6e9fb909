"""
Reaction panels keep their whole state inside the buttons.

- `kinds` - fixed list of reactions and their emojis.
- `codec` - button payload <-> `callback_data` string.
- `voting` - pure voter list transformations.
"""

from .codec import ButtonPayload, ReactionCodec, get_codec
from .kinds import REACTIONS, Reaction
from .voting import empty_panel, press, toggle
