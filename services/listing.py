"""Búsqueda, orden y paginación de listas de documentos en memoria."""
import math


def search(docs, term, fields):
    term = (term or '').strip().lower()
    if not term:
        return list(docs)
    return [
        doc for doc in docs
        if any(term in str(doc.get(field) or '').lower() for field in fields)
    ]


def sort_docs(docs, field, order='asc', key=None):
    key = key or (lambda doc: _sort_value(doc.get(field)))
    return sorted(docs, key=key, reverse=(order == 'desc'))


def _sort_value(value):
    # Los valores vacíos van al principio y las cadenas no distinguen mayúsculas
    if value is None:
        return (0, '')
    if isinstance(value, str):
        return (1, value.lower())
    return (1, value)


def paginate(docs, page, per_page):
    total_pages = max(math.ceil(len(docs) / per_page), 1)
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return {
        'items': docs[start:start + per_page],
        'page': page,
        'total_pages': total_pages,
        'total': len(docs),
    }
