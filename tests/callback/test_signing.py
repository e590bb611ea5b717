import hashlib
import hmac
import re
from qr_relay.callback.signing import derive_secret, sign_body, verify_signature

def test_derive_secret_is_truncated_sha256_of_concatenation():
    # sha256("abcdef")
    assert derive_secret("abc", "def") == "bef57ec7f53a6d40beb640a780a639c8"

def test_derive_secret_shape_and_determinism():
    s = derive_secret("abc", "def")
    assert re.fullmatch(r"[0-9a-f]{32}", s)
    assert derive_secret("abc", "def") == s

def test_derive_secret_changes_with_either_input():
    base = derive_secret("abc", "def")
    assert derive_secret("abd", "def") != base
    assert derive_secret("abc", "deg") != base

def test_derive_secret_empty_inputs_are_well_defined():
    assert derive_secret("", "") == "e3b0c44298fc1c149afbf4c8996fb924"

def test_sign_body_matches_hmac_sha256():
    body = b'{"instance_id":"i1","status":"configuring"}'
    secret = derive_secret("i1", "k1")
    expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    assert sign_body(body, secret) == "sha256=" + expected

def test_verify_signature_rejects_modified_body():
    secret = derive_secret("i1", "k1")
    body = b'{"status":"qr_ready"}'
    header = sign_body(body, secret)
    assert verify_signature(body, secret, header) is True
    assert verify_signature(body + b" ", secret, header) is False
    assert verify_signature(body, secret, "") is False
