"""
Shared Flask extension instances.

Created as a separate module so route blueprints can use the limiter without
importing the application factory.
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Storage, default limits and the on/off switch come from the app config
# (RATELIMIT_STORAGE_URI, RATELIMIT_DEFAULT, RATELIMIT_ENABLED) in init_app().
limiter = Limiter(key_func=get_remote_address)
