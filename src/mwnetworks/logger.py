"""Package logger.

Handlers and levels are left to the application; records propagate to the root logger.
"""

import logging

log = logging.getLogger("mwnetworks")
log.addHandler(logging.NullHandler())
