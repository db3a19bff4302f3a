import logging
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

import config
from routes.posts import router as posts_router
from services.errors import PostError
from services.firestore import FirestoreDB
from services.posts import PostService

logging.basicConfig(level=config.LOG_LEVEL,
                    format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)

# User-facing messages for request fields that fail validation
FIELD_MESSAGES = {
    "text": "Text is required",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(config.FIREBASE_CREDENTIALS)
    firebase_app = firebase_admin.initialize_app(cred)

    # Initialize dependencies
    firestore = FirestoreDB(
        firebase_app,
        posts_collection=config.POSTS_COLLECTION,
        users_collection=config.USERS_COLLECTION,
    )
    app.state.post_service = PostService(firestore, delete_comment_by_id=config.COMMENT_DELETE_BY_ID)

    yield
    firebase_admin.delete_app(firebase_app)


app = FastAPI(lifespan=lifespan)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PostError)
async def post_error_handler(request: Request, exc: PostError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        loc = error.get("loc", ())
        param = str(loc[-1]) if loc else ""
        errors.append({
            "msg": FIELD_MESSAGES.get(param, error.get("msg")),
            "param": param,
            "location": loc[0] if loc else None,
            "value": None if error.get("type") == "missing" else error.get("input"),
        })
    return JSONResponse(status_code=400, content=jsonable_encoder({"errors": errors}))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse("Server Error!", status_code=500)


# Include routers
app.include_router(posts_router, prefix="/posts", tags=["posts"])


@app.get("/")
def root():
    return {"message": "Post API running"}
