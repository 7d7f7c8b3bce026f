from models import Message, Session


def test_session_omits_missing_preview():
    assert Session(id="s1", title="Chat 1").to_dict() == {"id": "s1", "title": "Chat 1"}
    assert Session.from_dict({"id": "s1", "title": "Chat 1", "preview": "p"}).preview == "p"


def test_message_omits_unset_feedback_fields():
    msg = Message(question=None, response="hi", timestamp=5)
    assert msg.to_dict() == {"question": None, "response": "hi", "table": [], "timestamp": 5}


def test_message_round_trips_feedback_fields():
    data = {
        "id": "abc",
        "role": "assistant",
        "question": "q",
        "response": "r",
        "table": [{"key": "k", "value": "v"}],
        "timestamp": 10,
        "feedback": "like",
        "feedbackAt": 11,
    }
    assert Message.from_dict(data).to_dict() == data


def test_matches_timestamp_compares_numerically():
    msg = Message(question="q", response="r", timestamp=1700000000000)
    assert msg.matches_timestamp(1700000000000.0)
    assert not msg.matches_timestamp(1700000000001)
    assert not Message(question="q", response="r", timestamp="bad").matches_timestamp(1)


def test_matches_timestamp_handles_values_too_large_for_float():
    msg = Message(question="q", response="r", timestamp=1700000000000)
    assert not msg.matches_timestamp(10 ** 400)
