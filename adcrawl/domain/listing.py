from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class ListingRecord:
    """Structured fields scraped from one article page."""

    url: str
    title: str
    location: str
    price: str
    description: str
    details: dict[str, str] = field(default_factory=dict)
    images: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
