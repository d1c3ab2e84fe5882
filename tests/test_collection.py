import pytest
from sqlalchemy.exc import OperationalError

import services.collection as collection_module
from models import db
from services.collection import Collection, Where
from utils.errors import AppError


@pytest.fixture
def products(app):
    collection = Collection('products')
    for name, price, stock, barcode in [
        ('Goma 185/65 R15', 3500.0, 8, '111'),
        ('Batería 12V', 5200.0, 2, '222'),
        ('Aceite 20W-50', 450.0, 30, None),
    ]:
        collection.add({'name': name, 'price': price, 'stock': stock, 'barcode': barcode})
    return collection


def test_unknown_collection_is_rejected(app):
    with pytest.raises(AppError) as exc:
        Collection('facturas_viejas')
    assert exc.value.code == 'INVALID_COLLECTION'


def test_add_returns_document_with_id(app):
    clients = Collection('clients')
    doc = clients.add({'id': 99, 'name': 'Juan Pérez', 'email': 'juan@example.com'})

    assert isinstance(doc['id'], int)
    assert doc['name'] == 'Juan Pérez'
    assert clients.data == [doc]


def test_fetch_all_lists_every_document(products):
    docs = Collection('products').fetch_all()
    assert [d['name'] for d in docs] == ['Goma 185/65 R15', 'Batería 12V', 'Aceite 20W-50']


def test_fetch_one_returns_none_for_missing_or_bad_id(products):
    collection = Collection('products')
    assert collection.fetch_one(12345) is None
    assert collection.fetch_one('abc') is None
    assert collection.error is None


def test_update_changes_only_given_fields(products):
    collection = Collection('products')
    product = collection.query([Where('barcode', '==', '111')])[0]

    collection.update(product['id'], {'stock': 3})

    updated = collection.fetch_one(product['id'])
    assert updated['stock'] == 3
    assert updated['name'] == 'Goma 185/65 R15'


def test_update_missing_document_raises_not_found(app):
    collection = Collection('clients')
    with pytest.raises(AppError) as exc:
        collection.update(42, {'name': 'Nadie'})
    assert exc.value.code == 'NOT_FOUND'
    assert collection.error is exc.value


def test_remove_deletes_document(products):
    collection = Collection('products')
    docs = collection.fetch_all()
    collection.remove(docs[0]['id'])

    assert collection.fetch_one(docs[0]['id']) is None
    assert len(collection.data) == 2


def test_remove_missing_document_raises_not_found(app):
    with pytest.raises(AppError) as exc:
        Collection('products').remove(777)
    assert exc.value.status == 404


def test_duplicate_barcode_is_already_exists(products):
    collection = Collection('products')
    with pytest.raises(AppError) as exc:
        collection.add({'name': 'Otra goma', 'barcode': '111'})
    assert exc.value.code == 'ALREADY_EXISTS'
    assert exc.value.status == 409
    # La sesión sigue utilizable después del rollback
    assert len(collection.fetch_all()) == 3


def test_query_operators(products):
    collection = Collection('products')

    low = collection.query([Where('stock', '<=', 8)], order_by='stock')
    assert [p['stock'] for p in low] == [2, 8]

    expensive = collection.query([{'field': 'price', 'operator': '>', 'value': 1000}], order_by='-price')
    assert [p['name'] for p in expensive] == ['Batería 12V', 'Goma 185/65 R15']

    chosen = collection.query([Where('barcode', 'in', ['111', '222'])])
    assert len(chosen) == 2

    others = collection.query([Where('name', 'not-in', ['Batería 12V'])])
    assert {p['name'] for p in others} == {'Goma 185/65 R15', 'Aceite 20W-50'}

    assert len(collection.query([Where('stock', '!=', 2)])) == 2


def test_query_limit(products):
    assert len(Collection('products').query(order_by='name', limit=2)) == 2


def test_query_rejects_unknown_field_and_operator(products):
    collection = Collection('products')
    with pytest.raises(AppError) as exc:
        collection.query([Where('color', '==', 'rojo')])
    assert exc.value.code == 'INVALID_QUERY'

    with pytest.raises(AppError) as exc:
        collection.query([Where('stock', 'like', 2)])
    assert exc.value.code == 'INVALID_QUERY'


def test_fetch_one_database_error_returns_none(products, monkeypatch):
    logged = []

    def broken_get(*args, **kwargs):
        raise OperationalError('SELECT', {}, Exception('database is locked'))

    monkeypatch.setattr(type(db.session), 'get', broken_get)
    monkeypatch.setattr(collection_module.logger, 'exception',
                        lambda msg, *args: logged.append(msg % args))

    collection = Collection('products')
    assert collection.fetch_one(1) is None
    assert collection.error.code == 'INTERNAL_ERROR'
    assert collection.error.status == 500
    assert logged == ['Error fetching products/1']
