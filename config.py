import os

from dotenv import load_dotenv

load_dotenv()

FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "./firebase.json")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

POSTS_COLLECTION = os.getenv("POSTS_COLLECTION", "posts")
USERS_COLLECTION = os.getenv("USERS_COLLECTION", "users")

# Remove the comment matching the requested id instead of the caller's first comment
COMMENT_DELETE_BY_ID = os.getenv("COMMENT_DELETE_BY_ID", "false").lower() in {"1", "true", "yes"}
