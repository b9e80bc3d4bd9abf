from .error_responses import *  # NOQA
from .request_query import *  # NOQA
from .resource import *  # NOQA
from .service import *  # NOQA
