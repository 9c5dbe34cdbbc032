import os

# Backend address
API_BASE_URL = os.getenv('POSTBOARD_API_URL', 'http://localhost:8000/api')

DEFAULT_HEADERS = {
    'Content-Type': 'application/json',
    'Accept': 'application/json',
}

# Seconds a success message stays on screen
SUCCESS_MESSAGE_TTL = 3.0

LOAD_ERROR_MESSAGE = 'Error while loading the posts. Make sure the backend is running.'
SAVE_ERROR_MESSAGE = 'Error while saving the post.'
DELETE_ERROR_MESSAGE = 'Error while deleting the post.'

CREATED_MESSAGE = 'Post created successfully!'
UPDATED_MESSAGE = 'Post updated successfully!'
DELETED_MESSAGE = 'Post deleted successfully!'
