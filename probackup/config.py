import os


class Config:
    """Base configuration"""

    # Placeholders, expected to be overridden with -s / -b
    DEFAULT_SOURCE_DIR = os.environ.get('BACKUP_SOURCE_DIR') or '/path/to/your/important-data'
    DEFAULT_BACKUP_DIR = os.environ.get('BACKUP_DIR') or '/path/to/your/backups'

    # Archive naming: {prefix}-{timestamp}.{extension}
    ARCHIVE_PREFIX = 'backup'
    ARCHIVE_EXTENSION = 'tar.gz'
    TIMESTAMP_FORMAT = '%Y-%m-%d_%H-%M-%S'

    # Logging
    LOG_FILENAME = 'backup.log'
    LOG_FORMAT = '%(asctime)s [%(levelname)s] - %(message)s'
    LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

    # External tools the pipeline shells out to
    REQUIRED_TOOLS = ('tar', 'pv', 'gzip')

    DEBUG = False


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'default': ProductionConfig
}


def get_config(config_name=None):
    """Resolve a configuration class, falling back to BACKUP_ENV."""
    if config_name is None:
        config_name = os.environ.get('BACKUP_ENV', 'production')
    return config.get(config_name, config['default'])


class BackupContext:
    """
    Everything a single backup run needs to know.

    Built once the command line has been parsed, so the log file always
    lives in the destination the user actually asked for.
    """

    def __init__(self, source_dir: str, backup_dir: str, settings=None):
        self.source_dir = source_dir
        self.backup_dir = backup_dir
        self.settings = settings or get_config()

    @property
    def log_file(self) -> str:
        return os.path.join(self.backup_dir, self.settings.LOG_FILENAME)

    def destination_path(self, filename: str) -> str:
        return os.path.join(self.backup_dir, filename)

    def __repr__(self):
        return f"<BackupContext source={self.source_dir!r} backup_dir={self.backup_dir!r}>"
