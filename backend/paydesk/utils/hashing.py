"""
Cryptographic Hashing Utilities — SHA-256 payload hashing for audit trails.
"""
import hashlib
import json


def generate_hash(data: dict) -> str:
    """Generate a SHA-256 hash of a dictionary (deterministic, sorted keys)."""
    canonical = json.dumps(data, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(canonical).hexdigest()


def generate_chain_hash(current_data: dict, previous_hash: str = "") -> str:
    """Generate a chain hash: SHA-256(previous_hash + current_payload).
    Each entry commits to its predecessor, so edits break the chain.
    """
    current_hash = generate_hash(current_data)
    chain_input = f"{previous_hash}{current_hash}".encode("utf-8")
    return hashlib.sha256(chain_input).hexdigest()


def fingerprint(secret: str) -> str:
    """Short SHA-256 fingerprint of a secret, safe to log and audit.
    Lets admins tell credential rotations apart without seeing the key.
    """
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()[:16]
