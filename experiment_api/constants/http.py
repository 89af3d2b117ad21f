"""HTTP and API constants."""

# HTTP Status Codes (commonly used)
HTTP_400_BAD_REQUEST = 400
HTTP_404_NOT_FOUND = 404
HTTP_422_UNPROCESSABLE_ENTITY = 422
HTTP_500_INTERNAL_SERVER_ERROR = 500

# CORS Configuration
CORS_MAX_AGE = 86400  # 24 hours in seconds
CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_HEADERS = [
    "Accept",
    "Accept-Language",
    "Content-Language",
    "Content-Type",
    "Authorization",
    "X-Requested-With",
]

# Rate Limiting
RATE_LIMIT_STORAGE_URL = "memory://"

# Security headers
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}

# Viewer page served by the frontend
VIEWER_PAGE_PATH = "/simple-experiment/index.html"
