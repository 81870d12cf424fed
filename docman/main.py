
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from docman.middleware.ratelimit import RateLimitMiddleware, token_or_ip_key
from docman.middleware.auth import auth_middleware
from docman.config import settings, ensure_secret_key
from docman.db.session import init_db
from docman.errors import register_exception_handlers
from docman.logging_config import setup_logging
from docman.auth.routes import router as auth_router
from docman.users.routes import router as users_router
from docman.documents.routes import router as documents_router, search_router
from docman.roles.routes import router as roles_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield

def create_app(*, init_database: bool = True) -> FastAPI:
    setup_logging(settings.log_level)
    ensure_secret_key(settings)
    app = FastAPI(title=settings.app_name, lifespan=lifespan if init_database else None)

    app.add_middleware(
        RateLimitMiddleware,
        window_seconds=settings.rate_limit_window_seconds,
        max_calls=settings.rate_limit_max_calls,
        key_func=token_or_ip_key,
        include_path_prefixes=("/login",),
    )
    app.middleware("http")(auth_middleware)

    # outermost, so 401/429 replies from the gate and limiter carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(documents_router)
    app.include_router(search_router)
    app.include_router(roles_router)

    @app.get("/", tags=["root"])
    def root():
        return {"message": "Welcome to Document management", "name": settings.app_name, "env": settings.app_env}

    @app.get("/health", tags=["root"])
    def health():
        return {"status": "healthy"}

    return app

app = create_app()
