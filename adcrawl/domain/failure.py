from enum import Enum
from typing import NamedTuple, Optional


class FailureKind(str, Enum):
    NAVIGATION = "NavigationFailure"
    PARSE = "ParseFailure"


class Failure(NamedTuple):
    """Terminal failure of a crawl, as reported to the caller."""
    kind: FailureKind
    url: str
    detail: str
    field: Optional[str] = None
    message: str = ""
