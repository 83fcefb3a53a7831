import traceback

def format_exception_string(e: Exception, source: str = "APP", comment: str = "") -> str: #For loggers
    tb = ''.join(traceback.format_exception(e))
    return f'[{source}: Exception] {comment}\n\nTraceback:\n{tb}'

class AppBaseException(Exception):
    """Global base exception"""
