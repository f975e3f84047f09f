"""
Permission matrix helpers (pure, no database access)

A matrix maps role -> set of permission identifiers. Every role in the
catalogue is present as a key, possibly with an empty set.
"""
import hashlib
from typing import Dict, Iterable, Mapping, Set, Tuple

from shiftpay.constants import PERMISSION_VALUES, ROLE_VALUES

PermissionMatrix = Dict[str, Set[str]]


def empty_matrix() -> PermissionMatrix:
    return {role: set() for role in sorted(ROLE_VALUES)}


def validate_pair(role: str, permission: str) -> None:
    if role not in ROLE_VALUES:
        raise ValueError(f"Unknown role '{role}'")
    if permission not in PERMISSION_VALUES:
        raise ValueError(f"Unknown permission '{permission}'")


def group_permissions(pairs: Iterable[Tuple[str, str]]) -> PermissionMatrix:
    """Group (role, permission) rows by role."""
    matrix = empty_matrix()
    for role, permission in pairs:
        matrix.setdefault(role, set()).add(permission)
    return matrix


def normalize(matrix: Mapping[str, Iterable[str]]) -> PermissionMatrix:
    """
    Validate a matrix coming from a client and return a clean copy.

    Raises:
        ValueError: On unknown roles or permissions
    """
    result = empty_matrix()
    for role, permissions in matrix.items():
        for permission in permissions:
            validate_pair(role, permission)
            result[role].add(permission)
    return result


def flatten(matrix: Mapping[str, Iterable[str]]) -> Set[Tuple[str, str]]:
    return {(role, permission) for role, permissions in matrix.items() for permission in permissions}


def toggle(matrix: Mapping[str, Iterable[str]], role: str, permission: str) -> PermissionMatrix:
    """
    Grant the permission if missing, revoke it if present.

    Returns a new matrix; the input is left untouched and nothing is persisted.
    """
    validate_pair(role, permission)
    updated = {r: set(perms) for r, perms in matrix.items()}
    granted = updated.setdefault(role, set())
    if permission in granted:
        granted.discard(permission)
    else:
        granted.add(permission)
    if not granted and role not in matrix:
        del updated[role]
    return updated


def revision_of(pairs: Iterable[Tuple[str, str]]) -> str:
    """Stable fingerprint of a permission set, used to detect concurrent saves."""
    digest = hashlib.sha256()
    for role, permission in sorted(set(pairs)):
        digest.update(f"{role}:{permission}\n".encode("utf-8"))
    return digest.hexdigest()
