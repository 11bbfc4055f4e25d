"""Implementation packages behind the ocdkit public API."""

import logging

logging.getLogger("ocdpack").addHandler(logging.NullHandler())
