from typing import List, Tuple

from .codec import ButtonPayload
from .kinds import REACTIONS, Reaction


def empty_panel() -> List[ButtonPayload]:
    return [ButtonPayload(reaction, []) for reaction in REACTIONS]


def toggle(users: List[int], user_id: int) -> List[int]:
    if user_id in users:
        return [u for u in users if u != user_id]
    return [*users, user_id]


def press(
    row: List[ButtonPayload],
    reaction: Reaction,
    user_id: int,
    exclusive=True,
) -> Tuple[List[ButtonPayload], bool]:
    """
    Apply user's press on the reaction button to the panel row.
    Return new row in the reactions order and True if the reaction was added.

    Pressed same button -> remove reaction.
    In exclusive mode user can have only one reaction on the panel,
    so pressing another button moves the reaction.

    Reactions missing from the row are restored empty,
    for duplicated reactions the last one wins.
    """
    voters = {r: [] for r in REACTIONS}
    for payload in row:
        voters[payload.reaction] = list(payload.users)

    added = user_id not in voters[reaction]
    for r in REACTIONS:
        if r == reaction:
            voters[r] = toggle(voters[r], user_id)
        elif exclusive and user_id in voters[r]:
            voters[r] = toggle(voters[r], user_id)
    return [ButtonPayload(r, voters[r]) for r in REACTIONS], added
