"""
Registry credentials and header encoding.
"""
from .auth import RegistryAuth
from .credentials import CredentialStore, basic_authorization, encode_registry_auth
