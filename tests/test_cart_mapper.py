"""
Unit Tests: cart and catalog mapping, money serialization

Builds transient ORM objects by hand, no database or repository involved.
"""
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from app.models import Cart, CartItem, Category, Product
from app.schemas.base import money_to_json
from app.schemas.cart import CartSummaryResponse
from app.services.cart_mapper import build_cart_item_response, build_cart_response, build_cart_summary
from app.services.catalog_mapper import (
    UNCATEGORIZED,
    as_decimal,
    build_category_response,
    build_product_response,
    category_name_for,
)


NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_product(price="10.00", stock=5, category=None, **kwargs):
    product = Product(
        id=uuid.uuid4(),
        name=kwargs.get("name", "Desk Lamp"),
        description=kwargs.get("description", "LED desk lamp"),
        price=Decimal(price),
        stock=stock,
        category_id=category.id if category else None,
    )
    product.category = category
    return product


def make_item(product, quantity, cart_id=None):
    item = CartItem(
        id=uuid.uuid4(),
        cart_id=cart_id or uuid.uuid4(),
        product_id=product.id,
        quantity=quantity,
        added_at=NOW,
    )
    item.product = product
    return item


def make_cart(items):
    cart = Cart(id=uuid.uuid4(), session_id="s1", created_at=NOW, updated_at=NOW)
    cart.items = items
    return cart


class TestCategoryName:

    def test_uses_linked_category(self):
        category = Category(id=uuid.uuid4(), name="Gadgets")

        assert category_name_for(make_product(category=category)) == "Gadgets"

    def test_falls_back_when_category_missing(self):
        assert category_name_for(make_product(category=None)) == UNCATEGORIZED
        assert UNCATEGORIZED == "Uncategorized"


class TestAsDecimal:

    def test_keeps_decimal(self):
        value = Decimal("19.99")
        assert as_decimal(value) is value

    def test_converts_float_without_binary_noise(self):
        assert as_decimal(19.99) == Decimal("19.99")


class TestCartItemResponse:

    def test_copies_product_fields(self):
        category = Category(id=uuid.uuid4(), name="Gadgets")
        product = make_product(price="12.50", stock=7, category=category)
        item = make_item(product, 2)

        response = build_cart_item_response(item)

        assert response.id == item.id
        assert response.product_id == product.id
        assert response.product_name == "Desk Lamp"
        assert response.product_description == "LED desk lamp"
        assert response.product_price == Decimal("12.50")
        assert response.category_name == "Gadgets"
        assert response.quantity == 2
        assert response.subtotal == Decimal("25.00")
        assert response.available_stock == 7
        assert response.added_at == NOW

    def test_missing_description_stays_none(self):
        item = make_item(make_product(description=None), 1)

        assert build_cart_item_response(item).product_description is None


class TestCartResponse:

    def test_empty_cart(self):
        response = build_cart_response(make_cart([]))

        assert response.items == []
        assert response.total_items == 0
        assert response.total_price == Decimal("0")
        assert response.session_id == "s1"

    def test_totals_sum_all_lines(self):
        items = [
            make_item(make_product(price="10.00"), 3),
            make_item(make_product(price="5.50"), 2),
        ]

        response = build_cart_response(make_cart(items))

        assert response.total_items == 5
        assert response.total_price == Decimal("41.00")
        assert [i.subtotal for i in response.items] == [Decimal("30.00"), Decimal("11.00")]

    def test_totals_follow_current_price(self):
        product = make_product(price="10.00")
        cart = make_cart([make_item(product, 2)])

        product.price = Decimal("7.25")

        assert build_cart_response(cart).total_price == Decimal("14.50")

    def test_json_uses_camel_case_and_numbers(self):
        cart = make_cart([make_item(make_product(price="19.99"), 1)])

        body = build_cart_response(cart).model_dump(mode="json", by_alias=True)

        assert set(body) == {"id", "sessionId", "items", "totalItems", "totalPrice", "createdAt", "updatedAt"}
        assert body["totalPrice"] == 19.99
        assert body["items"][0]["productPrice"] == 19.99
        assert body["items"][0]["categoryName"] == UNCATEGORIZED


class TestCartSummary:

    def test_no_items(self):
        summary = build_cart_summary([])

        assert summary.total_items == 0
        assert summary.total_price == Decimal("0")

    def test_matches_cart_totals(self):
        items = [
            make_item(make_product(price="10.00"), 2),
            make_item(make_product(price="20.00"), 3),
        ]
        cart = make_cart(items)

        summary = build_cart_summary(cart.items)
        response = build_cart_response(cart)

        assert summary.total_items == response.total_items == 5
        assert summary.total_price == response.total_price == Decimal("80.00")


class TestCatalogResponses:

    def test_product_response(self):
        category = Category(id=uuid.uuid4(), name="Books")
        product = make_product(price="19.99", stock=200, category=category, name="Novel")

        response = build_product_response(product)

        assert response.name == "Novel"
        assert response.price == Decimal("19.99")
        assert response.stock == 200
        assert response.category_id == category.id
        assert response.category_name == "Books"

    def test_category_response_counts_products(self):
        category = Category(id=uuid.uuid4(), name="Books", description="Reading")
        category.products = [make_product(), make_product()]

        response = build_category_response(category)

        assert response.name == "Books"
        assert response.description == "Reading"
        assert response.product_count == 2

    def test_category_without_products(self):
        response = build_category_response(Category(id=uuid.uuid4(), name="Games"))

        assert response.product_count == 0


class TestMoneySerialization:

    def test_two_decimal_amounts_are_exact(self):
        assert money_to_json(Decimal("19.99")) == 19.99
        assert money_to_json(Decimal("19.99") * 3) == 59.97

    def test_rounds_to_whole_cents(self):
        assert money_to_json(Decimal("12.345")) == 12.35
        assert money_to_json(Decimal("12.344")) == 12.34

    def test_large_totals_keep_cents(self):
        assert money_to_json(Decimal("123456789012.34")) == 123456789012.34

    def test_python_side_stays_decimal(self):
        summary = CartSummaryResponse(total_items=1, total_price=Decimal("10.005"))

        assert summary.total_price == Decimal("10.005")
        assert summary.model_dump(mode="json", by_alias=True) == {"totalItems": 1, "totalPrice": 10.01}
