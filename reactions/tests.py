import pytest

from reactions.codec import FORMATS, ButtonPayload, ReactionCodec, get_codec
from reactions.kinds import REACTIONS, Reaction
from reactions.voting import empty_panel, press, toggle

codecs = [ReactionCodec(fmt) for fmt in FORMATS.values()]


class TestKinds:
    def test_order(self):
        assert list(REACTIONS) == [
            Reaction.heart,
            Reaction.approve,
            Reaction.disapprove,
            Reaction.laugh,
            Reaction.anger,
            Reaction.sad,
        ]
        assert set(REACTIONS) == set(Reaction)

    def test_emojis(self):
        emojis = [r.emoji for r in REACTIONS]
        assert len(set(emojis)) == len(REACTIONS)
        assert Reaction.approve.emoji == '👍'
        assert Reaction.laugh.emoji == '😂'

    def test_from_tag(self):
        assert Reaction.from_tag('laugh') is Reaction.laugh
        assert Reaction.from_tag('love') is None
        assert Reaction.from_tag(None) is None
        assert Reaction.from_tag(1) is None


@pytest.mark.parametrize('codec', codecs, ids=list(FORMATS))
class TestCodec:
    @pytest.mark.parametrize('users', [[], [42], [3, 1, 2], [-1001234567890, 7]])
    def test_round_trip(self, codec, users):
        for reaction in REACTIONS:
            data = codec.encode(reaction, users)
            assert isinstance(data, str)
            assert codec.decode(data) == (reaction, users)

    def test_encode_is_deterministic(self, codec):
        assert codec.encode(Reaction.sad, [1, 2]) == codec.encode(Reaction.sad, [1, 2])

    def test_decode_bytes(self, codec):
        data = codec.encode(Reaction.anger, [5]).encode()
        assert codec.decode(data) == (Reaction.anger, [5])
        assert codec.decode(b'\xff\xfe') is None

    @pytest.mark.parametrize('data', [
        None,
        '',
        0,
        [],
        'foo',
        '~',
        'button:a',
        '{',
        '[' * 10000,
        '{"reaction": "approve"}',
        '{"reaction": "approve", "users": [1], "x": 1}',
        '{"reaction": "approve", "users": "1"}',
        '{"reaction": "approve", "users": [1.5]}',
        '{"reaction": "approve", "users": [true]}',
        '{"reaction": "approve", "users": [1, 1]}',
        '{"reaction": "love", "users": []}',
        'approve',
        'approve:1,',
        'approve:1,1',
        'approve: 1',
        'approve:1_000',
        'love:1',
        'Approve:',
        'approve:' + '1' * 5000,
        'approve:1,' + '2' * 21,
        '{"reaction":"approve","users":[' + '1' * 5000 + ']}',
        'approve:' + ',' * 5000,
        '\x00' * 5000,
    ])
    def test_decode_garbage(self, codec, data):
        assert codec.decode(data) is None

    def test_decode_long_payload(self, codec):
        users = list(range(10 ** 9, 10 ** 9 + 500))
        data = codec.encode(Reaction.laugh, users)
        assert len(data.encode()) > 64 * 50
        assert codec.decode(data) == (Reaction.laugh, users)

    def test_decode_extreme_ids(self, codec):
        users = [2 ** 63 - 1, -(2 ** 63)]
        assert codec.decode(codec.encode(Reaction.anger, users)) == (Reaction.anger, users)

    def test_decode_truncated(self, codec):
        data = codec.encode(Reaction.approve, [42, 43])
        for i in range(len(data) - 1):
            payload = codec.decode(data[:i])
            assert payload is None or payload.users != [42, 43]


def test_json_wire_format():
    codec = get_codec('json')
    assert codec.encode(Reaction.approve, [42]) == '{"reaction":"approve","users":[42]}'
    assert codec.decode('{"reaction": "heart", "users": []}') == (Reaction.heart, [])


def test_compact_wire_format():
    codec = get_codec('compact')
    assert codec.encode(Reaction.approve, [42, 7]) == 'approve:42,7'
    assert codec.encode(Reaction.approve, []) == 'approve:'
    assert codec.decode('sad:') == (Reaction.sad, [])


def test_get_codec_unknown():
    with pytest.raises(ValueError):
        get_codec('xml')


class TestVoting:
    def row(self, **users):
        return [ButtonPayload(r, users.get(str(r), [])) for r in REACTIONS]

    def test_toggle(self):
        assert toggle([], 1) == [1]
        assert toggle([2], 1) == [2, 1]
        assert toggle([2, 1, 3], 1) == [2, 3]

    def test_toggle_is_pure(self):
        users = [1]
        toggle(users, 1)
        toggle(users, 2)
        assert users == [1]

    def test_empty_panel(self):
        row = empty_panel()
        assert [p.reaction for p in row] == list(REACTIONS)
        assert all(p.users == [] for p in row)

    def test_press_fresh_panel(self):
        row, added = press(empty_panel(), Reaction.approve, 42)
        assert added
        assert row == self.row(approve=[42])

    def test_press_twice(self):
        original = self.row(laugh=[1], approve=[2])
        row, added = press(original, Reaction.approve, 42)
        assert added
        row, added = press(row, Reaction.approve, 42)
        assert not added
        assert row == original

        row, added = press(original, Reaction.approve, 2)
        assert not added
        row, added = press(row, Reaction.approve, 2)
        assert added
        assert row == original

    def test_press_exclusive(self):
        row, added = press(self.row(approve=[42, 1]), Reaction.laugh, 42)
        assert added
        assert row == self.row(approve=[1], laugh=[42])

    def test_press_not_exclusive(self):
        row, added = press(self.row(approve=[42, 1]), Reaction.laugh, 42, exclusive=False)
        assert added
        assert row == self.row(approve=[42, 1], laugh=[42])

        row, added = press(row, Reaction.approve, 42, exclusive=False)
        assert not added
        assert row == self.row(approve=[1], laugh=[42])

    def test_press_does_not_touch_other_users(self):
        row, _ = press(self.row(heart=[1], sad=[2, 3]), Reaction.sad, 4)
        assert row == self.row(heart=[1], sad=[2, 3, 4])

    def test_press_restores_order_and_missing_reactions(self):
        row = [ButtonPayload(Reaction.sad, [1]), ButtonPayload(Reaction.heart, [2])]
        row, added = press(row, Reaction.anger, 3)
        assert added
        assert [p.reaction for p in row] == list(REACTIONS)
        assert row == self.row(heart=[2], anger=[3], sad=[1])

    def test_press_does_not_mutate_row(self):
        original = self.row(approve=[42])
        press(original, Reaction.laugh, 42)
        assert original == self.row(approve=[42])
