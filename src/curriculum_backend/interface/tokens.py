import os
from typing import Optional
from keycove import encrypt, decrypt

# Fernet key; stored account passwords are reversible with it
secret_key = os.environ.get("TOKEN_SECRET")

def _secret(key: Optional[str]) -> str:
  key = key or secret_key
  if not key:
    raise RuntimeError("TOKEN_SECRET is not configured")
  return key

def decrypt_password(stored_password: str, key: Optional[str] = None) -> str:
  return decrypt(stored_password, _secret(key))

def encrypt_password(password: str, key: Optional[str] = None) -> str:
  return encrypt(password, _secret(key))
