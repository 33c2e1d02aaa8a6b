from decimal import Decimal

import pytest

from swishdrip.errors import NotFound, ValidationError
from swishdrip.services import cart as cart_service
from swishdrip.services import catalog


def test_create_product_with_sizes(ctx):
    product = catalog.create_product({
        'name': '  Air Max 90 ',
        'price': '139.999',
        'category': 'brand',
        'clothingType': 'shoes',
        'sizes': [{'size': '41', 'stock': 2}, {'size': '42', 'stock': 0}],
    })

    assert product.name == 'Air Max 90'
    assert product.price == Decimal('140.00')
    assert product.sku.startswith('BR-')
    assert product.in_stock is True
    assert product.to_dict()['sizes'] == [{'size': '41', 'stock': 2}, {'size': '42', 'stock': 0}]


def test_thrift_sku_prefix(ctx):
    product = catalog.create_product({'name': 'Vintage 501', 'price': 45, 'category': 'thrift',
                                      'clothingType': 'jeans'})
    assert product.sku.startswith('TH-')


@pytest.mark.parametrize('data', [
    {'price': 10, 'category': 'brand', 'clothingType': 'tee'},
    {'name': 'Tee', 'category': 'brand', 'clothingType': 'tee'},
    {'name': 'Tee', 'price': -1, 'category': 'brand', 'clothingType': 'tee'},
    {'name': 'Tee', 'price': 10, 'category': 'vintage', 'clothingType': 'tee'},
    {'name': 'Tee', 'price': 10, 'category': 'brand'},
    {'name': 'Tee', 'price': 10, 'category': 'brand', 'clothingType': 'tee',
     'sizes': [{'size': 'M', 'stock': 1}, {'size': 'M', 'stock': 2}]},
    {'name': 'Tee', 'price': 10, 'category': 'brand', 'clothingType': 'tee',
     'sizes': [{'size': 'M', 'stock': -1}]},
])
def test_create_product_validation(ctx, data):
    with pytest.raises(ValidationError):
        catalog.create_product(data)


def test_update_product_replaces_sizes(ctx, make_product):
    product_id = make_product(sizes=[('S', 1), ('M', 1)])

    product = catalog.update_product(product_id, {
        'sale': True,
        'salePrice': 70,
        'sizes': [{'size': 'M', 'stock': 0}, {'size': 'L', 'stock': 4}],
    })

    assert product.current_price == Decimal('70.00')
    assert [(s.size, s.stock) for s in product.sizes] == [('M', 0), ('L', 4)]
    assert product.total_stock == 4


def test_soft_delete_hides_product(ctx, make_product):
    product_id = make_product()

    catalog.deactivate_product(product_id)

    with pytest.raises(NotFound):
        catalog.get_product(product_id)
    assert catalog.get_product(product_id, include_inactive=True).is_active is False
    assert catalog.list_products().total == 0


def test_list_products_filters(ctx, make_product):
    make_product(name='Tee')
    make_product(name='Hoodie', sale=True, salePrice=50)
    make_product(name='Jeans', category='thrift')

    assert [p.name for p in catalog.list_products(on_sale=True).items] == ['Hoodie']
    assert [p.name for p in catalog.list_products(category='thrift').items] == ['Jeans']
    assert catalog.list_products(per_page=2).pages == 2


def test_removing_all_sizes_makes_product_sellable_again(ctx, shopper, make_product):
    user_id, _ = shopper
    product_id = make_product(sizes=[('M', 0), ('L', 0)])
    assert catalog.get_product(product_id).in_stock is False

    product = catalog.update_product(product_id, {'sizes': []})

    assert product.sizes == []
    assert product.in_stock is True
    assert len(cart_service.add_item(user_id, product_id)) == 1


def test_removing_all_sizes_respects_explicit_in_stock(ctx, make_product):
    product_id = make_product(sizes=[('M', 2)])

    product = catalog.update_product(product_id, {'sizes': [], 'inStock': False})

    assert product.in_stock is False
