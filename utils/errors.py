from sqlalchemy.exc import IntegrityError, NoResultFound

from utils.logger import get_logger

logger = get_logger('errors')


class AppError(Exception):
    """Error con código y estado HTTP que se muestra al usuario."""

    def __init__(self, message, code, status=400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    def to_dict(self):
        return {'success': False, 'code': self.code, 'message': self.message}


class PermissionDenied(Exception):
    pass


def handle_db_error(error):
    """Traduce una excepción de la base de datos a un AppError."""
    if isinstance(error, AppError):
        return error

    logger.error('Database error: %s', error)

    if isinstance(error, PermissionDenied):
        return AppError('No tienes permisos para realizar esta acción', 'PERMISSION_DENIED', 403)
    if isinstance(error, NoResultFound):
        return AppError('El recurso solicitado no existe', 'NOT_FOUND', 404)
    if isinstance(error, IntegrityError):
        return AppError('El recurso ya existe', 'ALREADY_EXISTS', 409)
    return AppError('Ha ocurrido un error inesperado', 'INTERNAL_ERROR', 500)
