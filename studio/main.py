# Run from project root: uvicorn studio.main:app --reload

import logging

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from studio.api.handlers import http_exception_handler
from studio.api.routes import router

logging.basicConfig(level=logging.INFO)


app = FastAPI(title="AI Studio Gemini Proxy")
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.include_router(router)
