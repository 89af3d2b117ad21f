"""Validation constants and regex patterns."""

import re

# JWT Token Validation
JWT_TOKEN_REGEX = re.compile(r"^[A-Za-z0-9-_]+\.[A-Za-z0-9-_]+\.[A-Za-z0-9-_]+$")
JWT_TOKEN_MIN_LENGTH = 10
JWT_TOKEN_MAX_LENGTH = 2048

# Firestore document id rules
DOCUMENT_ID_MAX_BYTES = 1500
DOCUMENT_ID_RESERVED_REGEX = re.compile(r"^__.*__$")
DOCUMENT_ID_FORBIDDEN_VALUES = frozenset({".", ".."})
