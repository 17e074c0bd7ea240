# json_table_editor/main.py
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from json_table_editor.config import CORS_ORIGINS, LOG_LEVEL, PORT
from json_table_editor.routes import router as api_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="JSON Table Editor")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # errors go out as {"error": "..."} so the page can show them directly
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.get("/")
def root():
    return {
        "message": "JSON Table Editor API",
        "endpoints": ["GET /api/data", "POST /api/data"],
    }


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
