from fastapi import Request
from fastapi.responses import JSONResponse
from docman.auth.deps import get_token
from docman.errors import AuthenticationRequired

PUBLIC_ROUTES = {
    ("POST", "/users"),
    ("POST", "/login"),
    ("GET", "/"),
    ("GET", "/health"),
}

PUBLIC_PREFIXES = ["/docs", "/redoc", "/openapi.json"]

def is_public(method: str, path: str) -> bool:
    if method == "OPTIONS":
        return True
    if (method, path.rstrip("/") or "/") in PUBLIC_ROUTES:
        return True
    return any(path == p or path.startswith(p) for p in PUBLIC_PREFIXES)

async def auth_middleware(request: Request, call_next):
    # token verification happens in get_current_user; this only turns away
    # anonymous requests before they reach a route
    if is_public(request.method, request.url.path):
        return await call_next(request)

    if not get_token(request):
        exc = AuthenticationRequired()
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    return await call_next(request)
