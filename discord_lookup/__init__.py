__version__ = "1.0.0"

# flake8: noqa: F401
from .client import *
from .errors import *
from .flag import *
from .guild import *
from .http import *
from .member import *
from .user import *
from .utils import MISSING, DISCORD_EPOCH, get_json_string, setup_logger
