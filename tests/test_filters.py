import pytest

from etherscan_api.errors import ValidationError
from etherscan_api.filters import EventLogFilter, TopicOperation


def test_topics_are_encoded_pairwise_in_insertion_order():
    log_filter = EventLogFilter(from_block=1)
    log_filter.add_topic("1").add_topic_with_operation("2", TopicOperation.OR).add_topic("3")

    params = log_filter.topic_params()
    assert params == {
        "topic0": "1",
        "topic0_1_opr": "and",
        "topic1": "2",
        "topic1_2_opr": "or",
        "topic2": "3",
        "topic2_3_opr": "and",
    }
    assert list(params) == [
        "topic0",
        "topic0_1_opr",
        "topic1",
        "topic1_2_opr",
        "topic2",
        "topic2_3_opr",
    ]


def test_topics_view():
    log_filter = EventLogFilter(from_block=1).add_topic("0xaa").add_topic_with_operation("0xbb", "OR")
    assert log_filter.topics == [("0xaa", TopicOperation.AND), ("0xbb", TopicOperation.OR)]


def test_topic_params_is_a_copy():
    log_filter = EventLogFilter(from_block=1).add_topic("0xaa")
    params = log_filter.topic_params()
    params["topic1"] = "0xbb"
    assert "topic1" not in log_filter.topic_params()


def test_at_most_four_topics():
    log_filter = EventLogFilter(from_block=1)
    for idx in range(4):
        log_filter.add_topic(f"0x{idx}")
    with pytest.raises(ValidationError):
        log_filter.add_topic("0x4")


def test_rejects_unknown_operation():
    with pytest.raises(ValidationError):
        EventLogFilter(from_block=1).add_topic_with_operation("0xaa", "xor")


def test_rejects_empty_topic():
    with pytest.raises(ValidationError):
        EventLogFilter(from_block=1).add_topic("")
