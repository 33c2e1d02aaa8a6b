import pytest

from swishdrip.errors import NotFound, ValidationError
from swishdrip.extensions import db
from swishdrip.models import Product
from swishdrip.services import inventory


def test_decrease_never_goes_negative(ctx, make_product):
    product_id = make_product(sizes=[('M', 2)])

    product = inventory.decrease_stock(product_id, 'M', 5)

    assert product.find_size('M').stock == 0
    assert product.purchase_count == 5
    assert product.in_stock is False


def test_decrease_and_increase(ctx, make_product):
    product_id = make_product(sizes=[('S', 1), ('M', 4)])

    inventory.decrease_stock(product_id, 'M')
    product = inventory.increase_stock(product_id, 'S', 3)

    assert [(s.size, s.stock) for s in product.sizes] == [('S', 4), ('M', 3)]
    assert product.purchase_count == 1


def test_increase_restores_in_stock_flag(ctx, make_product):
    product_id = make_product(sizes=[('M', 1)])
    assert inventory.decrease_stock(product_id, 'M').in_stock is False

    product = inventory.increase_stock(product_id, 'M', 2)

    assert product.in_stock is True
    assert product.total_stock == 2


def test_unknown_size_is_not_found(ctx, make_product):
    product_id = make_product(sizes=[('M', 2)])

    with pytest.raises(NotFound):
        inventory.decrease_stock(product_id, 'XL')
    with pytest.raises(NotFound):
        inventory.increase_stock(product_id, None)


def test_unsized_product_is_left_unchanged(ctx, make_product):
    product_id = make_product()

    product = inventory.decrease_stock(product_id, 'M', 3)

    assert product.in_stock is True
    assert product.purchase_count == 0
    assert product.total_stock == 1


def test_missing_product(ctx):
    with pytest.raises(NotFound):
        inventory.decrease_stock(404, 'M')


def test_quantity_must_be_positive(ctx, make_product):
    product_id = make_product(sizes=[('M', 2)])
    with pytest.raises(ValidationError):
        inventory.decrease_stock(product_id, 'M', 0)


def test_any_save_rederives_in_stock(ctx, make_product):
    product_id = make_product(sizes=[('M', 0), ('L', 0)])
    product = db.session.get(Product, product_id)
    assert product.in_stock is False

    product.find_size('L').stock = 1
    db.session.commit()

    assert db.session.get(Product, product_id).in_stock is True


def test_total_stock(ctx, make_product):
    sized = db.session.get(Product, make_product(name='Sized', sizes=[('M', 2), ('L', 3)]))
    unsized = db.session.get(Product, make_product(name='Unsized', inStock=False))

    assert sized.total_stock == 5
    assert unsized.total_stock == 0
