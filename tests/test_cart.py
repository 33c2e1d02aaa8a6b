from decimal import Decimal

import pytest

from swishdrip.errors import InsufficientStock, NotFound, ValidationError
from swishdrip.extensions import db
from swishdrip.models import CartItem, Product
from swishdrip.services import cart as cart_service


def test_clear_is_idempotent(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product()
    cart_service.add_item(user_id, product_id)

    assert cart_service.clear_cart(user_id) == []
    assert cart_service.get_cart(user_id) == []
    assert cart_service.clear_cart(user_id) == []
    assert cart_service.get_cart(user_id) == []


def test_adding_same_product_and_size_merges_lines(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(sizes=[('M', 5)])

    cart_service.add_item(user_id, product_id, 'M', 1)
    items = cart_service.add_item(user_id, product_id, 'M', 1)

    assert len(items) == 1
    assert items[0].quantity == 2


def test_different_sizes_are_separate_lines(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(sizes=[('M', 5), ('L', 5)])

    cart_service.add_item(user_id, product_id, 'M', 1)
    items = cart_service.add_item(user_id, product_id, 'L', 2)

    assert [(i.size, i.quantity) for i in items] == [('M', 1), ('L', 2)]


def test_quantity_defaults_to_one(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product()

    items = cart_service.add_item(user_id, product_id, quantity=None)

    assert items[0].quantity == 1


def test_add_snapshots_sale_price(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(price=80, sale=True, salePrice=60)

    items = cart_service.add_item(user_id, product_id)

    assert items[0].price == Decimal('60.00')


def test_snapshot_price_survives_product_price_change(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(price=50)
    cart_service.add_item(user_id, product_id)

    db.session.get(Product, product_id).price = Decimal('75.00')
    db.session.commit()

    line = cart_service.get_cart(user_id)[0]
    assert line.price == Decimal('50.00')
    assert line.subtotal == Decimal('75.00')


def test_update_to_zero_removes_line(ctx, shopper, make_product):
    user_id, _ = shopper
    first = make_product(name='First')
    second = make_product(name='Second')
    cart_service.add_item(user_id, first)
    cart_service.add_item(user_id, second)

    items = cart_service.update_item(user_id, first, None, 0)

    assert len(items) == 1
    assert items[0].product_id == second


def test_update_negative_quantity_removes_line(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product()
    cart_service.add_item(user_id, product_id)

    assert cart_service.update_item(user_id, product_id, None, -3) == []


def test_update_sets_quantity_without_stock_check(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(sizes=[('M', 2)])
    cart_service.add_item(user_id, product_id, 'M', 1)

    items = cart_service.update_item(user_id, product_id, 'M', 10)

    assert items[0].quantity == 10


def test_update_missing_line_is_not_found(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(sizes=[('M', 2)])
    cart_service.add_item(user_id, product_id, 'M', 1)

    with pytest.raises(NotFound):
        cart_service.update_item(user_id, product_id, 'L', 1)


def test_update_requires_quantity(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product()
    cart_service.add_item(user_id, product_id)

    with pytest.raises(ValidationError):
        cart_service.update_item(user_id, product_id, None, None)


def test_remove_item(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product()
    cart_service.add_item(user_id, product_id)

    assert cart_service.remove_item(user_id, product_id) == []
    with pytest.raises(NotFound):
        cart_service.remove_item(user_id, product_id)


def test_add_unknown_product(ctx, shopper):
    user_id, _ = shopper
    with pytest.raises(NotFound):
        cart_service.add_item(user_id, 999)


def test_add_inactive_product(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product()
    db.session.get(Product, product_id).is_active = False
    db.session.commit()

    with pytest.raises(NotFound):
        cart_service.add_item(user_id, product_id)


@pytest.mark.parametrize('quantity', [0, -1, 'two', 1.5])
def test_add_rejects_invalid_quantity(ctx, shopper, make_product, quantity):
    user_id, _ = shopper
    product_id = make_product()

    with pytest.raises(ValidationError):
        cart_service.add_item(user_id, product_id, quantity=quantity)


def test_add_rejects_unknown_size(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(sizes=[('M', 3)])

    with pytest.raises(NotFound):
        cart_service.add_item(user_id, product_id, 'XXL', 1)
    assert cart_service.get_cart(user_id) == []


def test_add_sized_product_requires_size(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(sizes=[('M', 3)])

    with pytest.raises(ValidationError):
        cart_service.add_item(user_id, product_id, None, 1)


def test_add_unsized_product_ignores_size(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product()

    items = cart_service.add_item(user_id, product_id, 'M', 1)

    assert items[0].size is None


def test_add_more_than_size_stock(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(sizes=[('M', 3), ('L', 0)])

    with pytest.raises(InsufficientStock) as exc:
        cart_service.add_item(user_id, product_id, 'L', 1)

    assert exc.value.available == 0
    assert CartItem.query.filter_by(user_id=user_id).count() == 0


def test_add_unsized_out_of_stock_product(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(inStock=False)

    with pytest.raises(InsufficientStock):
        cart_service.add_item(user_id, product_id)


def test_carts_are_per_user(ctx, shopper, other_shopper, make_product):
    user_id, _ = shopper
    other_id, _ = other_shopper
    product_id = make_product()
    cart_service.add_item(user_id, product_id)

    cart_service.clear_cart(other_id)

    assert len(cart_service.get_cart(user_id)) == 1
    assert cart_service.get_cart(other_id) == []


def test_sync_merges_with_max_quantity(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(sizes=[('M', 10)])
    cart_service.add_item(user_id, product_id, 'M', 3)

    items, skipped = cart_service.sync_cart(user_id, [{'productId': product_id, 'size': 'M', 'quantity': 2}])
    assert skipped == []
    assert items[0].quantity == 3

    items, _ = cart_service.sync_cart(user_id, [{'productId': product_id, 'size': 'M', 'quantity': 5}])
    items, _ = cart_service.sync_cart(user_id, [{'productId': product_id, 'size': 'M', 'quantity': 5}])
    assert len(items) == 1
    assert items[0].quantity == 5


def test_sync_reports_unusable_items(ctx, shopper, make_product):
    user_id, _ = shopper
    shirt = make_product(name='Shirt', sizes=[('M', 1)])
    tote = make_product(name='Tote')

    items, skipped = cart_service.sync_cart(user_id, [
        {'productId': 999, 'quantity': 1},
        {'productId': shirt, 'size': 'M', 'quantity': 4},
        {'productId': shirt, 'size': 'XS', 'quantity': 1},
        {'product_id': tote, 'quantity': 2},
    ])

    assert [(i.product_id, i.quantity) for i in items] == [(tote, 2)]
    assert [s['productId'] for s in skipped] == [999, shirt, shirt]
    assert all(s['reason'] for s in skipped)


def test_sync_requires_list(ctx, shopper):
    user_id, _ = shopper
    with pytest.raises(ValidationError):
        cart_service.sync_cart(user_id, {'productId': 1})
