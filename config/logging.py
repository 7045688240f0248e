from __future__ import annotations

import os

# Default logging level
level: str = os.getenv('LOG_LEVEL', 'info')

# Log line layout
format: str = '[%(asctime)s] %(levelname)s in %(name)s: %(message)s'
date_format: str = '%Y-%m-%d %H:%M:%S'
