"""Request keys, route path and formats shared across the package."""

# Set by the authentication middleware: verified subject of the caller.
SUBJECT_KEY = 'vault.subject'

IMPORT_PATH = '/api/ciphers/import'

TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%S.%f'
