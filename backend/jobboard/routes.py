# HTTP surface: POST commands on any path, GET static pages and uploads
import json
import os

from flask import Blueprint, Response, current_app, jsonify, request, send_from_directory
from werkzeug.exceptions import NotFound

from .errors import ApiError, MalformedRequest

api = Blueprint('api', __name__)

STATIC_TYPES = {
    '.js': 'text/javascript',
    '.css': 'text/css',
    '.json': 'application/json',
}

IMAGE_TYPES = {
    '.png': 'image/png',
    '.gif': 'image/gif',
}


def dispatcher():
    return current_app.extensions['jobboard']['dispatcher']


def not_found():
    return Response('Not Found', status=404, mimetype='text/plain')


@api.app_errorhandler(ApiError)
def handle_api_error(error: ApiError):
    current_app.logger.debug(f'{error.__class__.__name__} ({error.status_code}): {error.to_dict()}')
    return jsonify(error.to_dict()), error.status_code


@api.app_errorhandler(413)
def handle_too_large(error):
    current_app.logger.warning(f'Rejected request body over {current_app.config["MAX_CONTENT_LENGTH"]} bytes')
    return jsonify({'error': 'Request body too large'}), 413


@api.app_errorhandler(405)
def handle_other_method(error):
    return not_found()


@api.before_app_request
def answer_preflight():
    if request.method == 'OPTIONS':
        return Response(status=204)


@api.route('/', defaults={'path': ''}, methods=['GET', 'POST'])
@api.route('/<path:path>', methods=['GET', 'POST'])
def handle(path: str):
    if request.method == 'POST':
        return run_command()
    return serve_file(path)


def run_command():
    raw = request.get_data()
    if raw:
        try:
            payload = json.loads(raw.decode('utf-8'))
        except ValueError:
            current_app.logger.debug('Rejecting request body that is not JSON')
            raise MalformedRequest('Invalid JSON')
    else:
        payload = {}

    cmd = payload.get('cmd') if isinstance(payload, dict) else None
    current_app.logger.debug(f'POST {request.path} cmd={cmd}')
    return jsonify(dispatcher().dispatch(payload)), 200


def serve_file(path: str):
    config = current_app.config
    path = path or config['DEFAULT_PAGE']
    upload_prefix = config['UPLOAD_URL_PREFIX'].strip('/') + '/'

    try:
        if path.startswith(upload_prefix):
            filename = path[len(upload_prefix):]
            mimetype = IMAGE_TYPES.get(os.path.splitext(filename)[1].lower(), 'image/jpeg')
            current_app.logger.debug(f'Serving upload: {filename}')
            return send_from_directory(config['UPLOAD_FOLDER'], filename, mimetype=mimetype)

        mimetype = STATIC_TYPES.get(os.path.splitext(path)[1].lower(), 'text/html')
        current_app.logger.debug(f'Serving static asset: {path}')
        return send_from_directory(config['STATIC_FOLDER'], path, mimetype=mimetype)
    except NotFound:
        current_app.logger.debug(f'Static file not found: {path}')
        return not_found()
