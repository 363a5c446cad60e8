import pytest

from friends.errors import NotFoundError, ValidationError


@pytest.fixture
def five(ann_and_bo):
    """A 'team' group holding messages 1..5."""
    board = ann_and_bo
    board.create_group("team", "Team", "a1")
    for i in range(5):
        board.post_message("team", "a1", f"m{i + 1}")
    return board


def ids(page):
    return [m.id for m in page.messages]


def test_ids_increase_across_groups(ann_and_bo):
    board = ann_and_bo
    x = board.post_message("tech", "a1", "one")
    y = board.post_message("random", "a2", "two")
    z = board.post_message("tech", "a1", "three")
    assert x.id < y.id < z.id


def test_first_id_is_one(ann_and_bo):
    assert ann_and_bo.post_message("tech", "a1", "first").id == 1


def test_limit_keeps_the_newest(five):
    page = five.get_messages("team", limit=2, since=0)
    assert ids(page) == [4, 5]
    assert page.total == 5


def test_since_filters_older(five):
    page = five.get_messages("team", limit=50, since=3)
    assert ids(page) == [4, 5]
    assert page.total == 5


def test_since_and_limit_take_tail_of_filtered(five):
    page = five.get_messages("team", limit=2, since=1)
    assert ids(page) == [4, 5]


def test_since_past_end(five):
    page = five.get_messages("team", since=5)
    assert page.messages == []
    assert page.total == 5


def test_defaults_return_everything_ascending(five):
    page = five.get_messages("team")
    assert ids(page) == [1, 2, 3, 4, 5]
    assert [m.content for m in page.messages] == ["m1", "m2", "m3", "m4", "m5"]


def test_list_unknown_group_is_empty(board):
    page = board.get_messages("nope")
    assert page.messages == []
    assert page.total == 0


def test_list_rejects_non_positive_limit(five):
    with pytest.raises(ValidationError):
        five.get_messages("team", limit=0)


def test_messages_stay_in_their_group(ann_and_bo):
    board = ann_and_bo
    board.post_message("tech", "a1", "in tech")
    board.post_message("random", "a1", "in random")

    page = board.get_messages("tech")
    assert [m.content for m in page.messages] == ["in tech"]
    assert page.total == 1


def test_post_to_unknown_group_consumes_no_id(ann_and_bo):
    board = ann_and_bo
    board.post_message("tech", "a1", "one")

    with pytest.raises(NotFoundError, match="nope"):
        board.post_message("nope", "a1", "lost")

    assert board.post_message("tech", "a1", "two").id == 2


def test_post_by_unknown_agent_consumes_no_id(ann_and_bo):
    board = ann_and_bo
    with pytest.raises(NotFoundError, match="ghost"):
        board.post_message("tech", "ghost", "boo")
    assert board.post_message("tech", "a1", "hi").id == 1
    assert board.get_group("tech").message_count == 1


@pytest.mark.parametrize("content", ["", None])
def test_post_requires_content(ann_and_bo, content):
    board = ann_and_bo
    with pytest.raises(ValidationError):
        board.post_message("tech", "a1", content)
    assert board.post_message("tech", "a1", "ok").id == 1


def test_agent_name_is_a_snapshot(ann_and_bo):
    board = ann_and_bo
    board.post_message("tech", "a1", "before")
    board.register_agent("a1", "Annie")
    board.post_message("tech", "a1", "after")

    names = [m.agent_name for m in board.get_messages("tech").messages]
    assert names == ["Ann", "Annie"]


def test_reply_to_is_not_validated(ann_and_bo):
    board = ann_and_bo
    other = board.post_message("random", "a2", "elsewhere")
    dangling = board.post_message("tech", "a1", "re: nothing", reply_to=999)
    cross = board.post_message("tech", "a1", "re: other group", reply_to=other.id)

    stored = board.get_messages("tech").messages
    assert [m.reply_to for m in stored] == [999, other.id]
    assert dangling.reply_to == 999
    assert cross.reply_to == other.id


def test_post_returns_full_message(ann_and_bo):
    message = ann_and_bo.post_message("tech", "a1", "hello")
    assert message.to_dict() == {
        "id": 1,
        "groupId": "tech",
        "agentId": "a1",
        "agentName": "Ann",
        "content": "hello",
        "replyTo": None,
        "timestamp": message.timestamp,
    }
    assert message.timestamp.endswith("Z")


def test_posting_does_not_require_membership(ann_and_bo):
    board = ann_and_bo
    board.post_message("tech", "a2", "drive-by")
    assert board.get_group("tech").member_count == 0


def test_paging_values_beyond_64_bits(five):
    everything = five.get_messages("team", limit=2**63)
    assert [m.id for m in everything.messages] == [1, 2, 3, 4, 5]

    assert five.get_messages("team", since=2**63).messages == []
    assert [m.id for m in five.get_messages("team", since=-(2**64)).messages] == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("reply_to", [2**63, -(2**63) - 1])
def test_reply_to_beyond_64_bits_is_rejected(ann_and_bo, reply_to):
    board = ann_and_bo
    with pytest.raises(ValidationError, match="reply_to"):
        board.post_message("tech", "a1", "hi", reply_to=reply_to)
    assert board.post_message("tech", "a1", "ok", reply_to=2**63 - 1).id == 1
