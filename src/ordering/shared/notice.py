"""One-shot notices returned by commands for the next rendered response."""

from dataclasses import dataclass
from enum import Enum


class NoticeKind(Enum):
    SUCCESS = "success"
    DANGER = "danger"


@dataclass(frozen=True)
class Notice:
    """A short message addressed to one actor, consumed by the calling layer."""

    for_actor: str
    message: str
    kind: str = NoticeKind.SUCCESS.value
