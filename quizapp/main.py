from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from quizapp.model import users, categories, questions, quizzes, attempts, category_performance
from quizapp.router import (
    auth_router,
    categories_router,
    questions_router,
    quizzes_router,
    users_router,
)
from quizapp.config import settings


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.API_VERSION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:3000",  # For local development
        "http://localhost:5173",  # For Vite development
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
app.include_router(categories_router, prefix="/categories", tags=["Categories"])
app.include_router(questions_router, prefix="/questions", tags=["Questions"])
app.include_router(quizzes_router, prefix="/quizzes", tags=["Quizzes"])
app.include_router(users_router, prefix="/users", tags=["User"])

#####################
### Root Endpoint ###
#####################
@app.get("/")
def read_root():
    return {"name": settings.PROJECT_NAME, "environment": settings.ENV, "version": settings.API_VERSION}


@app.get("/health")
def health():
    return {"status": "OK", "message": "Server is running correctly"}

