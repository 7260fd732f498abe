from .errors import application_error_handler
from .logging import request_logging_middleware
from .rate_limit import limiter, rate_limit_exceeded_handler
