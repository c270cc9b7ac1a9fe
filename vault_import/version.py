"""Vault Import Meta information.
   Vault Import persists client-encrypted bulk import bundles into a vault.
"""
__title__ = 'vault_import'
__description__ = (
   'Vault Import reconciles client-encrypted bulk import bundles '
   'into durable vault folders and ciphers.'
)
__version__ = '0.1.0'
__copyright__ = 'Copyright (c) 2023 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/phenobarbital/vault-import'
