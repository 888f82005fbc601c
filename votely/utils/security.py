from werkzeug.security import generate_password_hash, check_password_hash

# Checked against when the account does not exist so a failed login costs
# the same whether or not the email is registered.
_DUMMY_HASH = generate_password_hash("votely-dummy-password")

def hash_password(raw_password: str) -> str:
    return generate_password_hash(raw_password)

def verify_password(raw_password: str, password_hash: str | None) -> bool:
    if not password_hash:
        check_password_hash(_DUMMY_HASH, raw_password)
        return False
    return check_password_hash(password_hash, raw_password)
