import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration"""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')

    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'postgresql://localhost/event_checkout_dev')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

    # Mobile money gateway (DCM)
    PAYMENT_GATEWAY_URL = os.getenv('PAYMENT_GATEWAY_URL', 'http://54.86.149.215/pay')
    DCM_PARTNER_CODE = os.getenv('DCM_PARTNER_CODE', 'MSH')
    PAYMENT_GATEWAY_TIMEOUT = int(os.getenv('PAYMENT_GATEWAY_TIMEOUT', '30'))


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    PAYMENT_GATEWAY_URL = 'http://gateway.test/pay'
    DCM_PARTNER_CODE = 'TEST'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
