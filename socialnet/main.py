from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .routes import router
from .core import init_metrics
from .config import log_level
import logging
from pythonjsonlogger import jsonlogger

# setup structured logging
logger = logging.getLogger('socialnet')
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(log_level())

app = FastAPI(title="SocialNet API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(router, prefix="/api")

@app.get('/healthz')
async def healthz():
    return {'status': 'ok'}

@app.middleware('http')
async def log_requests(request: Request, call_next):
    logger.info({'msg':'request_start','method':request.method,'path':request.url.path})
    response = await call_next(request)
    logger.info({'msg':'request_end','status': response.status_code})
    return response

@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception({'msg': 'unhandled_error', 'path': request.url.path})
    return JSONResponse(
        status_code=500,
        content={'view': 'error', 'errType': type(exc).__name__, 'errMsg': str(exc)},
    )

@app.on_event("startup")
async def startup():
    # Best-effort init, don't block app from starting if the exporter fails
    init_metrics()
