from .application import *  # NOQA
from .domain import *  # NOQA
from .initializer import *  # NOQA
from .mappings import *  # NOQA
from .models import *  # NOQA
from .sql_gateway import *  # NOQA
from .sql_model import *  # NOQA
