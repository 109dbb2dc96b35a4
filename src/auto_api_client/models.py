"""Request and response models for the auto-api endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Optional

# Order of the optional filters in the query string, after ``page``.
OFFER_FILTERS = (
    "brand",
    "model",
    "configuration",
    "complectation",
    "transmission",
    "color",
    "body_type",
    "engine_type",
    "year_from",
    "year_to",
    "mileage_from",
    "mileage_to",
    "price_from",
    "price_to",
)


def _require(payload: Any, key: str, kind: type) -> Any:
    if not isinstance(payload, Mapping):
        raise ValueError(f"expected an object holding {key!r}")
    if key not in payload:
        raise ValueError(f"missing field {key!r}")
    value = payload[key]
    # bool is an int subclass but never a valid id or counter
    if kind is int and isinstance(value, bool):
        raise ValueError(f"field {key!r} must be an integer")
    if not isinstance(value, kind):
        raise ValueError(f"field {key!r} must be {kind.__name__}")
    return value


@dataclass
class OffersQuery:
    """Filters for the offers listing. Only ``page`` is always sent."""

    page: int = 1
    brand: Optional[str] = None
    model: Optional[str] = None
    configuration: Optional[str] = None
    complectation: Optional[str] = None
    transmission: Optional[str] = None
    color: Optional[str] = None
    body_type: Optional[str] = None
    engine_type: Optional[str] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None
    mileage_from: Optional[int] = None
    mileage_to: Optional[int] = None
    price_from: Optional[int] = None
    price_to: Optional[int] = None

    def to_query_pairs(self) -> list[tuple[str, str]]:
        """Return ``(key, value)`` pairs with ``page`` first and unset filters dropped."""
        pairs = [("page", str(self.page))]
        for name in OFFER_FILTERS:
            value = getattr(self, name)
            if value is not None:
                pairs.append((name, str(value)))
        return pairs


@dataclass
class OfferData:
    """Common listing fields found in most sources' ``data`` payloads.

    Sources add their own fields and some omit these, so missing keys fall
    back to empty values instead of failing.
    """

    inner_id: str = ""
    url: str = ""
    mark: str = ""
    model: str = ""
    generation: str = ""
    configuration: str = ""
    complectation: str = ""
    year: str = ""
    color: str = ""
    price: str = ""
    km_age: str = ""
    engine_type: str = ""
    transmission_type: str = ""
    body_type: str = ""
    address: str = ""
    seller_type: str = ""
    is_dealer: bool = False
    displacement: str = ""
    offer_created: str = ""
    images: list[str] = field(default_factory=list)

    @classmethod
    def from_data(cls, data: Any) -> "OfferData":
        if not isinstance(data, Mapping):
            raise ValueError("offer data must be a JSON object")
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if raw is None:
                continue
            if f.name == "is_dealer":
                values[f.name] = bool(raw)
            elif f.name == "images":
                values[f.name] = [str(url) for url in raw] if isinstance(raw, list) else []
            else:
                values[f.name] = str(raw)
        return cls(**values)


@dataclass
class OfferItem:
    id: int
    inner_id: str
    change_type: str
    created_at: str
    data: Any

    @classmethod
    def from_payload(cls, payload: Any) -> "OfferItem":
        return cls(
            id=_require(payload, "id", int),
            inner_id=_require(payload, "inner_id", str),
            change_type=_require(payload, "change_type", str),
            created_at=_require(payload, "created_at", str),
            data=payload.get("data"),
        )

    def offer_data(self) -> OfferData:
        return OfferData.from_data(self.data)


class ChangeItem(OfferItem):
    """A single added/changed/removed entry of the changes feed."""


@dataclass
class OffersMeta:
    """Pagination of an offers listing. ``next_page`` is 0 on the last page."""

    page: int
    next_page: int
    limit: int

    @classmethod
    def from_payload(cls, payload: Any) -> "OffersMeta":
        return cls(
            page=_require(payload, "page", int),
            next_page=_require(payload, "next_page", int),
            limit=_require(payload, "limit", int),
        )


@dataclass
class ChangesMeta:
    """Cursor of a changes batch. ``next_change_id`` is 0 when the feed is drained."""

    cur_change_id: int
    next_change_id: int
    limit: int

    @classmethod
    def from_payload(cls, payload: Any) -> "ChangesMeta":
        return cls(
            cur_change_id=_require(payload, "cur_change_id", int),
            next_change_id=_require(payload, "next_change_id", int),
            limit=_require(payload, "limit", int),
        )


@dataclass
class OffersResult:
    result: list[OfferItem]
    meta: OffersMeta

    @classmethod
    def from_payload(cls, payload: Any) -> "OffersResult":
        items = _require(payload, "result", list)
        return cls(
            result=[OfferItem.from_payload(item) for item in items],
            meta=OffersMeta.from_payload(_require(payload, "meta", Mapping)),
        )

    @property
    def has_next(self) -> bool:
        return self.meta.next_page != 0


@dataclass
class ChangesResult:
    result: list[ChangeItem]
    meta: ChangesMeta

    @classmethod
    def from_payload(cls, payload: Any) -> "ChangesResult":
        items = _require(payload, "result", list)
        return cls(
            result=[ChangeItem.from_payload(item) for item in items],
            meta=ChangesMeta.from_payload(_require(payload, "meta", Mapping)),
        )

    @property
    def has_next(self) -> bool:
        return self.meta.next_change_id != 0


def parse_change_cursor(payload: Any) -> int:
    """Extract ``change_id`` from the cursor lookup response. Zero is a valid cursor."""
    return _require(payload, "change_id", int)
