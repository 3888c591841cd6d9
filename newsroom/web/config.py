"""Flask Configuration Classes"""
import os


class Config:
    """Base configuration - shared across all environments"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-prod'

    # Publishing secrets - the publish endpoint refuses to run without both
    GITHUB_TOKEN = os.environ.get('GITHUB_TOKEN')
    VERCEL_DEPLOY_HOOK = os.environ.get('VERCEL_DEPLOY_HOOK')

    GITHUB_REPO = os.environ.get('GITHUB_REPO') or 'johnnybassanelli/RABKL-newsroom'
    GITHUB_BRANCH = 'main'
    GITHUB_API_URL = 'https://api.github.com'
    PUBLISH_TIMEOUT = 30

    # Application settings
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024

    DEBUG = False


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    """Testing specific configuration"""
    TESTING = True
    GITHUB_TOKEN = 'test-token'
    VERCEL_DEPLOY_HOOK = 'https://deploy.example.test/hook'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
