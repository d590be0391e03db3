# result_sheet/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from result_sheet.core.config import CONFIG, is_development
from result_sheet.core.logger import get_logger
from result_sheet.routes.result_routes import router as results_router

logger = get_logger("app")

app = FastAPI(
    title="Result Sheet OCR – GPA",
    version="0.1.0",
)

# CORS (relaxed; tighten if needed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("System error on %s %s", request.method, request.url.path)
    content = {"success": False, "error": "Internal server error"}
    if is_development():
        content["details"] = str(exc)
    return JSONResponse(status_code=500, content=content)


@app.get("/")
def root_index():
    return {
        "message": "Result sheet OCR service is running",
        "environment": CONFIG.ENVIRONMENT,
    }


app.include_router(results_router)
