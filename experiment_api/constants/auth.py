"""Signed link constants."""

# JWT Configuration
JWT_ALGORITHM_DEFAULT = "HS256"
LINK_TTL_SECONDS_DEFAULT = 300
TOKEN_TYPE_BEARER = "bearer"

# Claim names carried by an external link token
CLAIM_SESSION_ID = "sessionId"
CLAIM_USER_ID = "userId"
CLAIM_EXPIRES_AT = "exp"
CLAIM_ISSUED_AT = "iat"
