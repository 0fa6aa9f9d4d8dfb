"""Board geometry settings read from environment variables."""

import os

# Default hex circumradius used when a caller does not pass an explicit size.
HEX_SIZE: float = float(os.environ.get('CATAN_HEX_SIZE', '50'))

# Absolute distance under which two computed points are treated as the same
# board vertex.
VERTEX_TOLERANCE: float = float(os.environ.get('CATAN_VERTEX_TOLERANCE', '1e-3'))

LOG_LEVEL: str = os.environ.get('CATAN_LOG_LEVEL', 'INFO').upper()
