# main.py
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aptiquest import models  # noqa: F401  (registers tables on Base)
from aptiquest.core.config import settings
from aptiquest.core.database import Base, engine
from aptiquest.routes.question import router as question_router
from aptiquest.routes.quiz import router as quiz_router
from aptiquest.routes.result import router as result_router
from aptiquest.routes.user import admin_router, auth_router

Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.PROJECT_NAME)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,  # Frontend URLs
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = [
        f"{'.'.join(str(part) for part in err.get('loc', []))}: {err.get('msg')}"
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {"error": "validation_error", "message": "; ".join(messages)}
        },
    )


@app.get("/")
def read_root():
    return {"message": "AptiQuest backend is running"}


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(question_router)
app.include_router(quiz_router)
app.include_router(result_router)
app.include_router(auth_router)
app.include_router(admin_router)
