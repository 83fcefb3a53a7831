# gunicorn -c userbase/gunicorn_conf.py userbase.main:app
import multiprocessing
import logging
from userbase.common.config import Config

bind = f"{Config.SERVER_HOST}:{Config.SERVER_PORT}"
workers = Config.SERVER_WORKERS or max(2, multiprocessing.cpu_count())
worker_class = "uvicorn.workers.UvicornWorker"

loglevel = "info"
accesslog = None
errorlog = "-"

timeout = 30
graceful_timeout = 30
reload = False


class DropUnclosedConnections(logging.Filter):
    '''aiomysql pools report dropped connections to the asyncio logger on worker shutdown'''
    def filter(self, record):
        return "Unclosed connection" not in record.getMessage()

logging.getLogger("asyncio").addFilter(DropUnclosedConnections())
