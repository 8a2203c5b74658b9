"""
Configuration subsystem for rediskit.

- **config.py**: Static configuration from environment variables
- **errors.py**: Configuration exception hierarchy

Usage
-----
```python
from rediskit.core.config import Config

url = Config.REDIS_URL
if Config.is_production():
    ...
```
"""

from rediskit.core.config.config import Config, Environment
from rediskit.core.config.errors import ConfigError, ConfigValidationError

__all__ = [
    "Config",
    "Environment",
    "ConfigError",
    "ConfigValidationError",
]
