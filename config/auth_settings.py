import os
from dotenv import load_dotenv

load_dotenv()

# JWT issued by the hosted auth platform
# Without a secret, claims are read unverified (local development only)
AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET", "")
AUTH_JWT_ALGORITHM = os.getenv("AUTH_JWT_ALGORITHM", "HS256")
AUTH_JWT_AUDIENCE = os.getenv("AUTH_JWT_AUDIENCE", "")  # e.g. "authenticated"

# Cookie fallback for browser clients
ACCESS_TOKEN_COOKIE = os.getenv("ACCESS_TOKEN_COOKIE", "access_token")
