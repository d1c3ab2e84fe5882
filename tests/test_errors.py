import json
import logging

from sqlalchemy.exc import IntegrityError, NoResultFound

from utils.errors import AppError, PermissionDenied, handle_db_error
from utils.logger import JsonFormatter, get_logger


def test_app_error_passes_through():
    error = AppError('Ya existe', 'ALREADY_EXISTS', 409)
    assert handle_db_error(error) is error


def test_database_errors_are_translated():
    assert handle_db_error(IntegrityError('INSERT', {}, Exception('UNIQUE'))).status == 409
    assert handle_db_error(NoResultFound()).code == 'NOT_FOUND'
    assert handle_db_error(PermissionDenied()).code == 'PERMISSION_DENIED'

    unexpected = handle_db_error(RuntimeError('boom'))
    assert unexpected.status == 500
    assert unexpected.to_dict() == {
        'success': False,
        'code': 'INTERNAL_ERROR',
        'message': 'Ha ocurrido un error inesperado',
    }


def test_child_loggers_share_the_application_logger():
    assert get_logger().name == 'gftire'
    assert get_logger('collection').parent.name == 'gftire'


def test_json_formatter_outputs_one_object_per_record():
    formatter = JsonFormatter({'level': 'levelname', 'message': 'message'})
    record = logging.LogRecord('gftire', logging.INFO, __file__, 1, 'Added %s/%s', ('clients', 3), None)
    assert json.loads(formatter.format(record)) == {'level': 'INFO', 'message': 'Added clients/3'}
