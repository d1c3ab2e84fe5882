import pytest

from services.invoicing import (
    MISSING_CLIENT, MISSING_ITEMS, InvoiceDraft, find_by_barcode, generate_invoice_number, search_products,
)
from utils.errors import AppError

GOMA = {'id': 1, 'name': 'Goma 205/55 R16', 'price': 4200.0, 'barcode': '7501', 'description': 'Radial'}
ARO = {'id': 2, 'name': 'Aro 15"', 'price': 1500.0, 'barcode': None, 'description': 'Aluminio'}


def test_invoice_number_format():
    number = generate_invoice_number()
    assert number.startswith('INV-')
    assert number[4:].isdigit()


def test_adding_same_product_increments_quantity():
    draft = InvoiceDraft(client_id=5)
    draft.add_product(GOMA)
    draft.add_product(GOMA)
    draft.add_product(ARO)

    assert [(i['product_id'], i['quantity']) for i in draft.items] == [(1, 2), (2, 1)]
    assert draft.total() == 2 * 4200.0 + 1500.0


def test_quantity_below_one_removes_line():
    draft = InvoiceDraft(client_id=5)
    draft.add_product(GOMA)
    draft.add_product(ARO)

    draft.update_quantity(1, 4)
    draft.update_quantity(2, 0)

    assert draft.items == [{'product_id': 1, 'product_name': 'Goma 205/55 R16', 'quantity': 4, 'price': 4200.0}]


def test_missing_details():
    draft = InvoiceDraft()
    assert draft.missing_details() == MISSING_CLIENT

    draft.client_id = 5
    assert draft.missing_details() == MISSING_ITEMS

    draft.add_product(ARO)
    assert draft.missing_details() is None


def test_build_requires_client_and_items():
    with pytest.raises(AppError) as exc:
        InvoiceDraft(client_id=5).build({'id': 5, 'name': 'Ana'})
    assert exc.value.code == 'MISSING_DETAILS'
    assert exc.value.message == MISSING_ITEMS


def test_build_snapshots_client_and_items():
    client = {'id': 5, 'name': 'Ana', 'email': 'ana@example.com'}
    draft = InvoiceDraft(client_id=5)
    draft.add_product(GOMA)

    doc = draft.build(client)
    client['name'] = 'Cambiado'
    draft.items[0]['quantity'] = 10

    assert doc['client']['name'] == 'Ana'
    assert doc['items'][0]['quantity'] == 1
    assert doc['total'] == 4200.0
    assert doc['client_id'] == 5


def test_find_by_barcode():
    assert find_by_barcode([GOMA, ARO], '7501') is GOMA
    assert find_by_barcode([GOMA, ARO], '0000') is None


def test_search_products_matches_name_barcode_and_description():
    assert search_products([GOMA, ARO], 'aro') == [ARO]
    assert search_products([GOMA, ARO], '750') == [GOMA]
    assert search_products([GOMA, ARO], 'ALUMINIO') == [ARO]
    assert search_products([GOMA, ARO], '') == [GOMA, ARO]
