import os


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///catalog.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SERVICE_NAME = os.getenv('SERVICE_NAME', 'catalog_service')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', 5002))

    DEFAULT_PAGE_SIZE = 10


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    LOG_LEVEL = 'WARNING'
