from .health import *
from .webhooks import *
