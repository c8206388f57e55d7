# Creates the Flask app (App Factory)
from flask import Flask
from flask_cors import CORS
import os
import logging
from .config import Config
from .dispatcher import CommandDispatcher
from .listings import ListingStore
from .messaging import MessageStore
from .storage import JsonDocument
from .users import CredentialStore

# Application Factory Function
def create_app(overrides=None):
    # Static pages are served by the blueprint, not Flask's static handler
    app = Flask(__name__, static_folder=None)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # Logging configuration (DEBUG level by default); no-op if the root logger is set up
    logging.basicConfig(level=app.config['LOG_LEVEL'],
                        format='%(asctime)s %(levelname)s %(name)s - %(message)s')
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Ensure folders exist
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    # Stores are loaded once; every mutation rewrites the whole document
    users = CredentialStore(JsonDocument(app.config['USERS_FILE']))
    messages = MessageStore(JsonDocument(app.config['MESSAGES_FILE']), users)
    listings = ListingStore(users, app.config['UPLOAD_FOLDER'], app.config['UPLOAD_URL_PREFIX'])
    app.extensions['jobboard'] = {
        'users': users,
        'listings': listings,
        'messages': messages,
        'dispatcher': CommandDispatcher(users, listings, messages),
    }

    # Extensions
    CORS(app, origins='*', send_wildcard=True,
         methods=['GET', 'POST', 'OPTIONS'], allow_headers=['Content-Type'])

    # Import and register the blueprint from routes.py
    from .routes import api as api_blueprint
    app.register_blueprint(api_blueprint)

    app.logger.debug(f'Application created: {len(users.users)} users, '
                     f'{len(messages.messages)} messages')
    return app
