from datetime import datetime


class DocumentMixin:
    """
    Gives a model the plain-dict view used by the collection accessor.

    document_fields lists the attributes that make up the document; `id`
    is always included and never written from incoming data.
    """
    document_fields = ()

    def to_dict(self):
        doc = {'id': self.id}
        for field in self.document_fields:
            value = getattr(self, field)
            if isinstance(value, datetime):
                value = value.isoformat()
            doc[field] = value
        return doc

    def apply(self, data):
        for key, value in data.items():
            if key in self.document_fields:
                setattr(self, key, value)
        return self
