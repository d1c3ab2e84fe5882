"""
Acceso genérico a las colecciones de documentos.

Cada vista trabaja contra una colección por nombre ("clients", "products",
"invoices", ...) usando las mismas seis operaciones: fetch_all, fetch_one,
add, update, remove y query. Los documentos son diccionarios planos con
una clave "id".
"""
from collections import namedtuple

from models import db, COLLECTIONS
from utils.errors import AppError, handle_db_error
from utils.logger import get_logger

logger = get_logger('collection')

Where = namedtuple('Where', ['field', 'operator', 'value'])

OPERATORS = {
    '==': lambda column, value: column == value,
    '!=': lambda column, value: column != value,
    '<': lambda column, value: column < value,
    '<=': lambda column, value: column <= value,
    '>': lambda column, value: column > value,
    '>=': lambda column, value: column >= value,
    'in': lambda column, value: column.in_(value),
    'not-in': lambda column, value: column.not_in(value),
}


def _coerce_id(doc_id):
    try:
        return int(doc_id)
    except (TypeError, ValueError):
        return None


class Collection:
    def __init__(self, name):
        if name not in COLLECTIONS:
            raise AppError(f'Colección desconocida: {name}', 'INVALID_COLLECTION', 400)
        self.name = name
        self.model = COLLECTIONS[name]
        self.data = []
        self.error = None

    def __repr__(self):
        return f'<Collection {self.name}>'

    def _fail(self, exc, rollback=False):
        if rollback:
            db.session.rollback()
        self.error = handle_db_error(exc)
        return self.error

    def _get(self, doc_id):
        pk = _coerce_id(doc_id)
        instance = db.session.get(self.model, pk) if pk is not None else None
        if instance is None:
            raise AppError('El recurso solicitado no existe', 'NOT_FOUND', 404)
        return instance

    def fetch_all(self):
        self.error = None
        try:
            docs = [instance.to_dict() for instance in self.model.query.order_by(self.model.id).all()]
        except Exception as exc:
            raise self._fail(exc) from exc

        seen = set()
        unique = []
        for doc in docs:
            if doc['id'] in seen:
                continue
            seen.add(doc['id'])
            unique.append(doc)
        self.data = unique
        return list(self.data)

    def fetch_one(self, doc_id):
        self.error = None
        pk = _coerce_id(doc_id)
        if pk is None:
            return None
        try:
            instance = db.session.get(self.model, pk)
        except Exception as exc:
            self._fail(exc)
            logger.exception('Error fetching %s/%s', self.name, doc_id)
            return None
        return instance.to_dict() if instance is not None else None

    def add(self, data):
        self.error = None
        data = {key: value for key, value in data.items() if key != 'id'}
        try:
            instance = self.model().apply(data)
            db.session.add(instance)
            db.session.commit()
        except Exception as exc:
            raise self._fail(exc, rollback=True) from exc

        doc = instance.to_dict()
        self.data.append(doc)
        logger.info('Added %s/%s', self.name, doc['id'])
        return doc

    def update(self, doc_id, data):
        self.error = None
        try:
            instance = self._get(doc_id)
            instance.apply({key: value for key, value in data.items() if key != 'id'})
            db.session.commit()
        except Exception as exc:
            raise self._fail(exc, rollback=True) from exc

        doc = instance.to_dict()
        self.data = [doc if item['id'] == doc['id'] else item for item in self.data]
        logger.info('Updated %s/%s', self.name, doc['id'])

    def remove(self, doc_id):
        self.error = None
        try:
            instance = self._get(doc_id)
            pk = instance.id
            db.session.delete(instance)
            db.session.commit()
        except Exception as exc:
            raise self._fail(exc, rollback=True) from exc

        self.data = [item for item in self.data if item['id'] != pk]
        logger.info('Removed %s/%s', self.name, pk)

    def query(self, constraints=(), order_by=None, limit=None):
        self.error = None
        try:
            q = self.model.query
            for constraint in constraints:
                q = q.filter(self._condition(constraint))
            if order_by:
                q = q.order_by(self._ordering(order_by))
            if limit:
                q = q.limit(limit)
            return [instance.to_dict() for instance in q.all()]
        except Exception as exc:
            raise self._fail(exc) from exc

    def _column(self, field):
        column = self.model.__table__.columns.get(field)
        if column is None:
            raise AppError(f'Campo desconocido: {field}', 'INVALID_QUERY', 400)
        return getattr(self.model, field)

    def _condition(self, constraint):
        if isinstance(constraint, dict):
            constraint = Where(constraint['field'], constraint['operator'], constraint['value'])
        build = OPERATORS.get(constraint.operator)
        if build is None:
            raise AppError(f'Operador no soportado: {constraint.operator}', 'INVALID_QUERY', 400)
        return build(self._column(constraint.field), constraint.value)

    def _ordering(self, order_by):
        if order_by.startswith('-'):
            return self._column(order_by[1:]).desc()
        return self._column(order_by).asc()
