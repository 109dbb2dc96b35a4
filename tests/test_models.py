import pytest

from auto_api_client.models import (
    OfferData,
    OfferItem,
    OffersQuery,
    OffersResult,
    parse_change_cursor,
)


def test_query_pairs_page_only() -> None:
    assert OffersQuery(page=3).to_query_pairs() == [("page", "3")]


def test_query_pairs_all_filters_in_order() -> None:
    query = OffersQuery(
        page=1,
        brand="Hyundai",
        model="Sonata",
        configuration="sedan",
        complectation="Premium",
        transmission="auto",
        color="white",
        body_type="sedan",
        engine_type="gasoline",
        year_from=2018,
        year_to=2022,
        mileage_from=0,
        mileage_to=80000,
        price_from=1000,
        price_to=25000,
    )

    keys = [key for key, _ in query.to_query_pairs()]

    assert keys == [
        "page",
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
    ]
    assert len(set(keys)) == len(keys)


def test_query_pairs_keep_zero_values() -> None:
    pairs = OffersQuery(page=1, mileage_from=0, price_to=None).to_query_pairs()
    assert pairs == [("page", "1"), ("mileage_from", "0")]


def test_offer_item_keeps_data_opaque() -> None:
    item = OfferItem.from_payload(
        {
            "id": 10,
            "inner_id": "x",
            "change_type": "changed",
            "created_at": "2024-02-01",
            "data": {"anything": [1, 2, {"nested": True}]},
        }
    )
    assert item.data == {"anything": [1, 2, {"nested": True}]}


def test_offer_item_missing_data_is_none() -> None:
    item = OfferItem.from_payload(
        {"id": 10, "inner_id": "x", "change_type": "", "created_at": ""}
    )
    assert item.data is None


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"result": {}, "meta": {"page": 1, "next_page": 0, "limit": 20}},
        {"result": []},
        {"result": [], "meta": {"page": "1", "next_page": 0, "limit": 20}},
        {"result": [], "meta": {"page": True, "next_page": 0, "limit": 20}},
        {"result": [{"id": 1}], "meta": {"page": 1, "next_page": 0, "limit": 20}},
    ],
)
def test_offers_result_rejects_wrong_shape(payload) -> None:
    with pytest.raises(ValueError):
        OffersResult.from_payload(payload)


def test_parse_change_cursor_zero() -> None:
    assert parse_change_cursor({"change_id": 0}) == 0


def test_parse_change_cursor_requires_integer() -> None:
    with pytest.raises(ValueError):
        parse_change_cursor({"change_id": "12"})


def test_offer_data_projection() -> None:
    data = OfferData.from_data(
        {
            "inner_id": "40427050",
            "url": "https://www.encar.com/dc/dc_cardetailview.do?carid=40427050",
            "mark": "Hyundai",
            "model": "Grandeur",
            "year": 2021,
            "price": "2850",
            "km_age": "41000",
            "is_dealer": True,
            "images": ["https://img/1.jpg", "https://img/2.jpg"],
            "source_specific": "ignored",
        }
    )

    assert data.mark == "Hyundai"
    assert data.year == "2021"
    assert data.is_dealer is True
    assert data.images == ["https://img/1.jpg", "https://img/2.jpg"]
    assert data.generation == ""
    assert data.seller_type == ""


def test_offer_data_requires_object() -> None:
    with pytest.raises(ValueError):
        OfferData.from_data(["not", "an", "object"])
