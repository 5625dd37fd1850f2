"""ledgercomm.log module."""

import logging

LOG = logging.getLogger("ledgercomm")
