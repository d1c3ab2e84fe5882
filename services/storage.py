import os
import time

from flask import current_app, url_for
from werkzeug.utils import secure_filename

from utils.errors import AppError
from utils.logger import get_logger

logger = get_logger('storage')

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}


def allowed_image(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def save_product_image(file_storage):
    """Guarda la imagen subida y devuelve la URL pública."""
    filename = secure_filename(file_storage.filename or '')
    if not filename or not allowed_image(filename):
        raise AppError('Formato de imagen no soportado', 'INVALID_IMAGE', 400)

    folder = current_app.config['UPLOAD_FOLDER']
    os.makedirs(folder, exist_ok=True)
    stored_name = f'{int(time.time() * 1000)}-{filename}'
    try:
        file_storage.save(os.path.join(folder, stored_name))
    except OSError as exc:
        logger.error('Could not store image %s: %s', stored_name, exc)
        raise AppError('Error al subir la imagen', 'UPLOAD_FAILED', 500) from exc

    logger.info('Stored product image %s', stored_name)
    return url_for('uploaded_image', filename=stored_name)
