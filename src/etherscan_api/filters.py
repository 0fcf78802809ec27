from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from .errors import ValidationError

MAX_TOPICS = 4


class TopicOperation(str, Enum):
    AND = "and"
    OR = "or"


class EventLogFilter:
    """
    Block range, contract address and topic constraints for a getLogs query.

    Topics are positional: the Nth added topic is sent as `topicN`, together
    with `topicN_(N+1)_opr` linking it to the next one.
    """

    def __init__(
        self,
        from_block: int,
        to_block: Optional[int] = None,
        address: Optional[str] = None,
    ) -> None:
        self.from_block = from_block
        self.to_block = to_block
        self.address = address
        self._topics: Dict[str, str] = {}

    def _add_topic(self, topic: str, op: Union[TopicOperation, str]) -> "EventLogFilter":
        try:
            operation = TopicOperation(op.lower() if isinstance(op, str) else op)
        except ValueError as exc:
            raise ValidationError(f"Unsupported topic operation '{op}'. Expected and|or.") from exc

        position = len(self._topics) // 2
        if position >= MAX_TOPICS:
            raise ValidationError(f"At most {MAX_TOPICS} topics are supported.")
        if not isinstance(topic, str) or not topic.strip():
            raise ValidationError(f"topic{position} must be a non-empty string.")

        self._topics[f"topic{position}"] = topic.strip()
        self._topics[f"topic{position}_{position + 1}_opr"] = operation.value
        return self

    def add_topic(self, topic: str) -> "EventLogFilter":
        return self._add_topic(topic, TopicOperation.AND)

    def add_topic_with_operation(
        self, topic: str, op: Union[TopicOperation, str]
    ) -> "EventLogFilter":
        return self._add_topic(topic, op)

    @property
    def topics(self) -> List[Tuple[str, TopicOperation]]:
        pairs = []
        for position in range(len(self._topics) // 2):
            pairs.append(
                (
                    self._topics[f"topic{position}"],
                    TopicOperation(self._topics[f"topic{position}_{position + 1}_opr"]),
                )
            )
        return pairs

    def topic_params(self) -> Dict[str, str]:
        return dict(self._topics)

    def __repr__(self) -> str:
        return (
            f"EventLogFilter(from_block={self.from_block!r}, to_block={self.to_block!r}, "
            f"address={self.address!r}, topics={self.topics!r})"
        )
