import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Socket.IO namespace the game protocol is served on
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    # Identifier lengths
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '6'))
    PLAYER_TOKEN_LENGTH = int(os.environ.get('PLAYER_TOKEN_LENGTH', '10'))
    # Winner name that earns a meme; empty disables celebrations
    CELEBRATION_TRIGGER_NAME = os.environ.get('CELEBRATION_TRIGGER_NAME', 'bram')
    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ALLOWED_ORIGINS',
            'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
        ).split(',')
        if origin.strip()
    ]
    # Largest inbound frame; image symbols arrive as data URLs
    MAX_MESSAGE_BYTES = int(os.environ.get('MAX_MESSAGE_BYTES', str(100 * 1024 * 1024)))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
