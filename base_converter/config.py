class DefaultConfig:
    SECRET_KEY = "dev"
    LOG_LEVEL = "DEBUG"
    LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
    MAX_CONTENT_LENGTH = 64 * 1024
    HOST = "127.0.0.1"
    PORT = 5001
    DEBUG = False


ENV_PREFIX = "BASE_CONVERTER"
