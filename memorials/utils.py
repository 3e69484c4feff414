import string
import secrets

ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_access_code(length=8):
    return ''.join(secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(length))
