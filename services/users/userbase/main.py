#Fastapi/Asyncio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

#Project files
from userbase.common.config import Config
import userbase.common.logs as logs
from userbase.infrastructure.dependencies import DatabaseManager
from userbase.presentation.exception_handlers import register_exception_handlers, error_response
import userbase.presentation.routers as routers

#Logging
import logging
import loguru # type: ignore


###################
#       App       #
###################

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f'[APP: Startup] Startup began...')

    #Database
    await DatabaseManager.wait_for_startup(attempts=Config.DB_WAIT_MAX_RETRIES, interval_sec=Config.DB_WAIT_INTERVAL_SECONDS)
    await DatabaseManager.initialize_data_structures()

    logger.info(f'[APP: Startup] Startup finished!')
    yield
    await DatabaseManager.close()
    logger.info(f'[APP: Shutdown] Database connections closed')


logs.init_loggers()
logger = logging.getLogger('userbase')

app = FastAPI(
    title = f'{Config.APP_NAME} commit {Config.GIT_COMMIT}',
    swagger_ui_parameters={
        "defaultModelsExpandDepth": -1,
        "docExpansion": None,
        "displayRequestDuration":True
    },
    lifespan=lifespan,
)

app.include_router(routers.UserRouter)
register_exception_handlers(app)


@app.middleware("http")
async def unhandled_exceptions_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        loguru.logger.exception(e)
        return error_response(500, "Unhandled error")


########################
#        Health        #
########################

@app.get("/")
@app.get("/health", include_in_schema=False)
async def read_root():
    """Indicates if the server is alive"""
    return JSONResponse({"successful": True, "data": {"status": "ok", "mode": Config.MODE}})
