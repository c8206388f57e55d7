# Configuration settings
import os
from dotenv import load_dotenv

# This line loads the variables from your .env file
load_dotenv()

# This class holds all the configuration variables for the job board
class Config:
    # JSON documents holding every user (with listings) and every message
    USERS_FILE = os.environ.get('USERS_FILE', os.path.join(os.getcwd(), 'users.txt'))
    MESSAGES_FILE = os.environ.get('MESSAGES_FILE', os.path.join(os.getcwd(), 'messages.txt'))

    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))
    UPLOAD_URL_PREFIX = os.environ.get('UPLOAD_URL_PREFIX', '/uploads')

    # HTML/CSS/JS served for GET requests
    STATIC_FOLDER = os.environ.get('STATIC_FOLDER', os.getcwd())
    DEFAULT_PAGE = os.environ.get('DEFAULT_PAGE', 'login.html')

    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 50 * 1000 * 1000))

    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 8080))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG').upper()
